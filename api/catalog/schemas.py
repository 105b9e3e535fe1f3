"""
Catalog request/response models.

`New*` models are the writable field sets (create and full-replace update).
Stored models add the database id.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class NewArtist(BaseModel):
    name: str = Field(..., min_length=1)
    country: str | None = None
    created_at: str


class NewAlbum(BaseModel):
    title: str
    artist_id: int | None = None
    release_year: int | None = None
    label: str | None = None
    format: str | None = None
    country: str | None = None
    genre: str | None = None
    style: str | None = None
    created_at: str


class NewTrack(BaseModel):
    title: str
    artist_name: str
    album_id: int | None = None
    duration_seconds: int | None = None
    bpm: float | None = None
    tone: str | None = None
    # Slot label such as "A1" or "B2".
    position: str | None = None
    # Free-text rating, usually emoji.
    score: str | None = None
    entrega_id: int | None = None
    created_at: str


class NewBatch(BaseModel):
    name: str
    created_at: str


class NewEntrega(BaseModel):
    name: str
    batch_id: int | None = None
    created_at: str


class Artist(NewArtist):
    id: int


class Album(NewAlbum):
    id: int


class Track(NewTrack):
    id: int


class Batch(NewBatch):
    id: int


class Entrega(NewEntrega):
    id: int
