"""
Markdown articles served straight from a directory.

Names are checked before the filesystem is touched: only bare `*.md`
filenames are accepted, never paths.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from core.errors import BadRequest, NotFound

logger = logging.getLogger(__name__)

ARTICLE_EXTENSION = ".md"


def is_safe_markdown_name(name: str) -> bool:
    return (
        name.endswith(ARTICLE_EXTENSION)
        and "/" not in name
        and "\\" not in name
        and ".." not in name
    )


def ensure_articles_dir(directory: Path) -> None:
    """
    Create the directory if needed and make sure it can be listed.
    """
    directory.mkdir(parents=True, exist_ok=True)
    next(directory.iterdir(), None)
    logger.info("Articles directory is readable: %s", directory)


def _list_sync(directory: Path) -> list[str]:
    return sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.suffix == ARTICLE_EXTENSION and entry.is_file()
    )


async def list_articles(directory: Path) -> list[str]:
    return await asyncio.to_thread(_list_sync, directory)


async def read_article(directory: Path, filename: str) -> str:
    if not is_safe_markdown_name(filename):
        raise BadRequest(f"Invalid article name: {filename!r}")

    try:
        return await asyncio.to_thread((directory / filename).read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise NotFound(f"Article {filename!r} not found.") from exc
