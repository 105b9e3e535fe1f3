"""
Article endpoints (HTML).
"""

from __future__ import annotations

from html import escape
from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from core import settings

from . import service

router = APIRouter()


@router.get("/articles", response_class=HTMLResponse)
async def list_articles() -> str:
    files = await service.list_articles(settings.articles_dir())
    items = "".join(
        f'<li><a href="/articles/{quote(name)}">{escape(name)}</a></li>' for name in files
    )
    return f"<h1>Articles</h1><ul>{items}</ul>"


@router.get("/articles/{filename}", response_class=HTMLResponse)
async def view_article(filename: str) -> str:
    content = await service.read_article(settings.articles_dir(), filename)
    return (
        f"<h1>{escape(filename)}</h1>"
        '<p><a href="/articles">Back</a></p>'
        f"<pre>{escape(content, quote=False)}</pre>"
    )
