"""
Bulk JSON import endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from . import schemas, service

router = APIRouter()


@router.post("/import/json", response_model=schemas.ImportResponse)
async def import_json(request: Request) -> dict:
    """
    Import entregas, albums, batches and tracks in one transaction.

    The body is parsed here rather than by FastAPI so malformed input maps to
    a PayloadError (400) before any database work starts.
    """
    payload = service.parse_payload(await request.body())
    result = await service.import_payload(payload)
    return {"status": "ok", "created": result.as_dict()}
