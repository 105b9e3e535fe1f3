"""
Catalog business logic.

Single-statement operations; each one auto-commits on the pool.
"""

from __future__ import annotations

from core.errors import NotFound

from . import repository, schemas


def _found(row: dict | None, resource: str, resource_id: int) -> dict:
    if row is None:
        raise NotFound(f"{resource} with id {resource_id} not found.")
    return row


async def list_artists() -> list[dict]:
    return await repository.list_artists()


async def list_albums() -> list[dict]:
    return await repository.list_albums()


async def create_album(record: schemas.NewAlbum) -> dict:
    return await repository.create_album(record)


async def update_album(album_id: int, record: schemas.NewAlbum) -> dict:
    row = await repository.update_album(album_id, record)
    return _found(row, "Album", album_id)


async def list_tracks() -> list[dict]:
    return await repository.list_tracks()


async def create_track(record: schemas.NewTrack) -> dict:
    return await repository.create_track(record)


async def update_track(track_id: int, record: schemas.NewTrack) -> dict:
    row = await repository.update_track(track_id, record)
    return _found(row, "Track", track_id)


async def list_batches() -> list[dict]:
    return await repository.list_batches()


async def create_batch(record: schemas.NewBatch) -> dict:
    return await repository.create_batch(record)


async def update_batch(batch_id: int, record: schemas.NewBatch) -> dict:
    row = await repository.update_batch(batch_id, record)
    return _found(row, "Batch", batch_id)


async def list_entregas() -> list[dict]:
    return await repository.list_entregas()


async def create_entrega(record: schemas.NewEntrega) -> dict:
    return await repository.create_entrega(record)


async def update_entrega(entrega_id: int, record: schemas.NewEntrega) -> dict:
    row = await repository.update_entrega(entrega_id, record)
    return _found(row, "Entrega", entrega_id)
