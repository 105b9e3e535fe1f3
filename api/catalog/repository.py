"""
Catalog persistence (raw SQL).

Every function takes an optional `conn`; pass the connection yielded by
`db.transaction()` to run the statement inside that transaction.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db

from . import schemas

ARTIST_COLUMNS = "id, name, country, created_at"
ALBUM_COLUMNS = "id, title, artist_id, release_year, label, format, country, genre, style, created_at"
TRACK_COLUMNS = (
    "id, title, artist_name, album_id, duration_seconds, bpm, tone, position, score, entrega_id, created_at"
)
BATCH_COLUMNS = "id, name, created_at"
ENTREGA_COLUMNS = "id, name, batch_id, created_at"


def _required(row: dict[str, Any] | None, what: str) -> dict[str, Any]:
    if row is None:
        raise RuntimeError(f"Failed to insert {what}.")
    return row


# ---------------------------------------------------------------------------
# Artists
# ---------------------------------------------------------------------------


async def list_artists(*, conn: asyncpg.Connection | None = None) -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {ARTIST_COLUMNS} FROM artists ORDER BY id", conn=conn)


async def create_artist(record: schemas.NewArtist, *, conn: asyncpg.Connection | None = None) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO artists (name, country, created_at)
        VALUES ($1, $2, $3)
        RETURNING {ARTIST_COLUMNS}
        """,
        record.name,
        record.country,
        record.created_at,
        conn=conn,
    )
    return _required(row, "artist")


async def update_artist(
    artist_id: int,
    record: schemas.NewArtist,
    *,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE artists
        SET name = $1, country = $2, created_at = $3
        WHERE id = $4
        RETURNING {ARTIST_COLUMNS}
        """,
        record.name,
        record.country,
        record.created_at,
        artist_id,
        conn=conn,
    )


# ---------------------------------------------------------------------------
# Albums
# ---------------------------------------------------------------------------


async def list_albums(*, conn: asyncpg.Connection | None = None) -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {ALBUM_COLUMNS} FROM albums ORDER BY id", conn=conn)


async def create_album(record: schemas.NewAlbum, *, conn: asyncpg.Connection | None = None) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO albums (title, artist_id, release_year, label, format, country, genre, style, created_at)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
        RETURNING {ALBUM_COLUMNS}
        """,
        record.title,
        record.artist_id,
        record.release_year,
        record.label,
        record.format,
        record.country,
        record.genre,
        record.style,
        record.created_at,
        conn=conn,
    )
    return _required(row, "album")


async def update_album(
    album_id: int,
    record: schemas.NewAlbum,
    *,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE albums
        SET title = $1, artist_id = $2, release_year = $3, label = $4, format = $5,
            country = $6, genre = $7, style = $8, created_at = $9
        WHERE id = $10
        RETURNING {ALBUM_COLUMNS}
        """,
        record.title,
        record.artist_id,
        record.release_year,
        record.label,
        record.format,
        record.country,
        record.genre,
        record.style,
        record.created_at,
        album_id,
        conn=conn,
    )


async def insert_album_if_absent(
    record: schemas.NewAlbum,
    *,
    conn: asyncpg.Connection | None = None,
) -> int | None:
    """
    Insert unless the title is already taken. Returns the new id, or None on conflict.
    """
    return await db.fetch_val(
        """
        INSERT INTO albums (title, artist_id, release_year, label, format, country, genre, style, created_at)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
        ON CONFLICT (title) DO NOTHING
        RETURNING id
        """,
        record.title,
        record.artist_id,
        record.release_year,
        record.label,
        record.format,
        record.country,
        record.genre,
        record.style,
        record.created_at,
        conn=conn,
    )


async def album_ids_by_title(*, conn: asyncpg.Connection | None = None) -> dict[str, int]:
    rows = await db.fetch_all("SELECT id, title FROM albums", conn=conn)
    return {str(r["title"]): int(r["id"]) for r in rows}


async def get_album_id(title: str, *, conn: asyncpg.Connection | None = None) -> int | None:
    return await db.fetch_val("SELECT id FROM albums WHERE title = $1", title, conn=conn)


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------


async def list_tracks(*, conn: asyncpg.Connection | None = None) -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {TRACK_COLUMNS} FROM tracks ORDER BY position, id", conn=conn)


async def create_track(record: schemas.NewTrack, *, conn: asyncpg.Connection | None = None) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO tracks (title, artist_name, album_id, duration_seconds, bpm, tone,
                            position, score, entrega_id, created_at)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
        RETURNING {TRACK_COLUMNS}
        """,
        record.title,
        record.artist_name,
        record.album_id,
        record.duration_seconds,
        record.bpm,
        record.tone,
        record.position,
        record.score,
        record.entrega_id,
        record.created_at,
        conn=conn,
    )
    return _required(row, "track")


async def update_track(
    track_id: int,
    record: schemas.NewTrack,
    *,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE tracks
        SET title = $1, artist_name = $2, album_id = $3, duration_seconds = $4, bpm = $5,
            tone = $6, position = $7, score = $8, entrega_id = $9, created_at = $10
        WHERE id = $11
        RETURNING {TRACK_COLUMNS}
        """,
        record.title,
        record.artist_name,
        record.album_id,
        record.duration_seconds,
        record.bpm,
        record.tone,
        record.position,
        record.score,
        record.entrega_id,
        record.created_at,
        track_id,
        conn=conn,
    )


async def track_keys(*, conn: asyncpg.Connection | None = None) -> set[tuple[str, str, int | None]]:
    """
    Dedup keys (title, artist_name, entrega_id) of every stored track.
    """
    rows = await db.fetch_all("SELECT title, artist_name, entrega_id FROM tracks", conn=conn)
    return {
        (str(r["title"]), str(r["artist_name"]), int(r["entrega_id"]) if r["entrega_id"] is not None else None)
        for r in rows
    }


# ---------------------------------------------------------------------------
# Batches
# ---------------------------------------------------------------------------


async def list_batches(*, conn: asyncpg.Connection | None = None) -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {BATCH_COLUMNS} FROM batches ORDER BY id", conn=conn)


async def create_batch(record: schemas.NewBatch, *, conn: asyncpg.Connection | None = None) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO batches (name, created_at)
        VALUES ($1, $2)
        RETURNING {BATCH_COLUMNS}
        """,
        record.name,
        record.created_at,
        conn=conn,
    )
    return _required(row, "batch")


async def update_batch(
    batch_id: int,
    record: schemas.NewBatch,
    *,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE batches
        SET name = $1, created_at = $2
        WHERE id = $3
        RETURNING {BATCH_COLUMNS}
        """,
        record.name,
        record.created_at,
        batch_id,
        conn=conn,
    )


# ---------------------------------------------------------------------------
# Entregas
# ---------------------------------------------------------------------------


async def list_entregas(*, conn: asyncpg.Connection | None = None) -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {ENTREGA_COLUMNS} FROM entregas ORDER BY id", conn=conn)


async def create_entrega(record: schemas.NewEntrega, *, conn: asyncpg.Connection | None = None) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO entregas (name, batch_id, created_at)
        VALUES ($1, $2, $3)
        RETURNING {ENTREGA_COLUMNS}
        """,
        record.name,
        record.batch_id,
        record.created_at,
        conn=conn,
    )
    return _required(row, "entrega")


async def update_entrega(
    entrega_id: int,
    record: schemas.NewEntrega,
    *,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE entregas
        SET name = $1, batch_id = $2, created_at = $3
        WHERE id = $4
        RETURNING {ENTREGA_COLUMNS}
        """,
        record.name,
        record.batch_id,
        record.created_at,
        entrega_id,
        conn=conn,
    )


async def insert_entrega_if_absent(
    record: schemas.NewEntrega,
    *,
    conn: asyncpg.Connection | None = None,
) -> int | None:
    """
    Insert unless the name is already taken. Returns the new id, or None on conflict.
    """
    return await db.fetch_val(
        """
        INSERT INTO entregas (name, batch_id, created_at)
        VALUES ($1, $2, $3)
        ON CONFLICT (name) DO NOTHING
        RETURNING id
        """,
        record.name,
        record.batch_id,
        record.created_at,
        conn=conn,
    )


async def entrega_ids_by_name(*, conn: asyncpg.Connection | None = None) -> dict[str, int]:
    rows = await db.fetch_all("SELECT id, name FROM entregas", conn=conn)
    return {str(r["name"]): int(r["id"]) for r in rows}


async def get_entrega_id(name: str, *, conn: asyncpg.Connection | None = None) -> int | None:
    return await db.fetch_val("SELECT id FROM entregas WHERE name = $1", name, conn=conn)


async def any_entrega_exists(*, conn: asyncpg.Connection | None = None) -> bool:
    row = await db.fetch_one("SELECT 1 AS ok FROM entregas LIMIT 1", conn=conn)
    return row is not None
