"""
Entity CRUD endpoints: list, create, full-replace update.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.get("/artists", response_model=list[schemas.Artist])
async def get_artists() -> list[dict]:
    return await service.list_artists()


@router.get("/albums", response_model=list[schemas.Album])
async def get_albums() -> list[dict]:
    return await service.list_albums()


@router.post("/albums", response_model=schemas.Album, status_code=status.HTTP_201_CREATED)
async def create_album(request: schemas.NewAlbum) -> dict:
    return await service.create_album(request)


@router.put("/albums/{album_id}", response_model=schemas.Album)
async def update_album(album_id: int, request: schemas.NewAlbum) -> dict:
    return await service.update_album(album_id, request)


@router.get("/tracks", response_model=list[schemas.Track])
async def get_tracks() -> list[dict]:
    return await service.list_tracks()


@router.post("/tracks", response_model=schemas.Track, status_code=status.HTTP_201_CREATED)
async def create_track(request: schemas.NewTrack) -> dict:
    return await service.create_track(request)


@router.put("/tracks/{track_id}", response_model=schemas.Track)
async def update_track(track_id: int, request: schemas.NewTrack) -> dict:
    return await service.update_track(track_id, request)


@router.get("/batches", response_model=list[schemas.Batch])
async def get_batches() -> list[dict]:
    return await service.list_batches()


@router.post("/batches", response_model=schemas.Batch, status_code=status.HTTP_201_CREATED)
async def create_batch(request: schemas.NewBatch) -> dict:
    return await service.create_batch(request)


@router.put("/batches/{batch_id}", response_model=schemas.Batch)
async def update_batch(batch_id: int, request: schemas.NewBatch) -> dict:
    return await service.update_batch(batch_id, request)


@router.get("/entregas", response_model=list[schemas.Entrega])
async def get_entregas() -> list[dict]:
    return await service.list_entregas()


@router.post("/entregas", response_model=schemas.Entrega, status_code=status.HTTP_201_CREATED)
async def create_entrega(request: schemas.NewEntrega) -> dict:
    return await service.create_entrega(request)


@router.put("/entregas/{entrega_id}", response_model=schemas.Entrega)
async def update_entrega(entrega_id: int, request: schemas.NewEntrega) -> dict:
    return await service.update_entrega(entrega_id, request)
