"""
Bulk import payload.

Track `entrega_id` / `album_id` here are 1-based positions into the payload's
own `entregas` / `albums` lists, not database ids. `entrega.batch_id` and
`album.artist_id` are real ids and are passed through as-is.
"""

from __future__ import annotations

from pydantic import BaseModel

from catalog.schemas import NewAlbum, NewBatch, NewEntrega, NewTrack


class ImportPayload(BaseModel):
    albums: list[NewAlbum] | None = None
    tracks: list[NewTrack] | None = None
    batches: list[NewBatch] | None = None
    entregas: list[NewEntrega] | None = None


class ImportCounts(BaseModel):
    entregas: int
    albums: int
    tracks: int
    batches: int


class ImportResponse(BaseModel):
    status: str = "ok"
    created: ImportCounts
