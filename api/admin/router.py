"""
Minimal admin pages: home, health and quick-insert HTML forms.
"""

from __future__ import annotations

from typing import TypeVar

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, ValidationError

from catalog import schemas as catalog_schemas
from catalog import service as catalog_service
from core.errors import PayloadError

from . import pages

router = APIRouter()

ModelT = TypeVar("ModelT", bound=BaseModel)


async def _read_form(request: Request, model: type[ModelT]) -> ModelT:
    """
    Validate a urlencoded form into `model`. Blank inputs count as missing.
    """
    form = await request.form()
    data = {key: value for key, value in form.items() if isinstance(value, str) and value.strip()}
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise PayloadError(f"Invalid form: {exc.errors()[0]['loc'][0]}: {exc.errors()[0]['msg']}") from exc


def _back_to_admin() -> RedirectResponse:
    return RedirectResponse(url="/admin", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse)
async def home() -> str:
    return pages.HOME_PAGE


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/admin", response_class=HTMLResponse)
async def admin_page() -> str:
    return pages.ADMIN_PAGE


@router.post("/admin/albums")
async def create_album_form(request: Request) -> RedirectResponse:
    record = await _read_form(request, catalog_schemas.NewAlbum)
    await catalog_service.create_album(record)
    return _back_to_admin()


@router.post("/admin/tracks")
async def create_track_form(request: Request) -> RedirectResponse:
    record = await _read_form(request, catalog_schemas.NewTrack)
    await catalog_service.create_track(record)
    return _back_to_admin()


@router.post("/admin/batches")
async def create_batch_form(request: Request) -> RedirectResponse:
    record = await _read_form(request, catalog_schemas.NewBatch)
    await catalog_service.create_batch(record)
    return _back_to_admin()


@router.post("/admin/entregas")
async def create_entrega_form(request: Request) -> RedirectResponse:
    record = await _read_form(request, catalog_schemas.NewEntrega)
    await catalog_service.create_entrega(record)
    return _back_to_admin()
