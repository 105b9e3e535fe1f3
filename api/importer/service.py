"""
Catalog bootstrap and bulk import.

Two loaders share one result type:

- `import_payload()` is granular and idempotent. It checks each entrega (by
  name), album (by title) and track (by title, artist_name, entrega) and only
  inserts what is missing.
- `seed_once()` is coarse. If any entrega exists it does nothing; otherwise it
  inserts a fixed entrega and its tracks.

Both run inside a single transaction, so a failure leaves nothing behind.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import asyncpg
from pydantic import ValidationError

from catalog import repository
from catalog.schemas import NewAlbum, NewEntrega, NewTrack
from core import db
from core.errors import PayloadError, StorageError

from . import schemas, seed

logger = logging.getLogger(__name__)

TrackKey = tuple[str, str, int | None]


@dataclass
class ImportResult:
    entregas: int = 0
    albums: int = 0
    tracks: int = 0
    batches: int = 0

    @property
    def created_anything(self) -> bool:
        return any((self.entregas, self.albums, self.tracks, self.batches))

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class PositionMap:
    """
    Maps 1-based payload positions to database ids for the duration of one import.
    """

    def __init__(self) -> None:
        self._ids: dict[int, int] = {}

    def record(self, position: int, db_id: int) -> None:
        self._ids[position] = db_id

    def resolve(self, position: int | None) -> int | None:
        if position is None:
            return None
        return self._ids.get(position)

    def __len__(self) -> int:
        return len(self._ids)


def parse_payload(raw: bytes | str | dict[str, Any]) -> schemas.ImportPayload:
    """
    Validate raw JSON (or an already-decoded dict) into an ImportPayload.
    """
    try:
        if isinstance(raw, (bytes, str)):
            return schemas.ImportPayload.model_validate_json(raw)
        return schemas.ImportPayload.model_validate(raw)
    except ValidationError as exc:
        raise PayloadError(f"Invalid import payload: {exc.error_count()} error(s): {exc.errors()[0]['msg']}") from exc


async def _resolve_entrega(
    conn: asyncpg.Connection,
    record: NewEntrega,
    known: dict[str, int],
    result: ImportResult,
) -> int:
    existing_id = known.get(record.name)
    if existing_id is not None:
        logger.info("Entrega %r already exists, skipping", record.name)
        return existing_id

    entrega_id = await repository.insert_entrega_if_absent(record, conn=conn)
    if entrega_id is None:
        # Another transaction committed the same name after our snapshot.
        entrega_id = await repository.get_entrega_id(record.name, conn=conn)
        if entrega_id is None:
            raise StorageError(f"Entrega {record.name!r} conflicted but could not be read back.")
        logger.info("Entrega %r was created concurrently, reusing id %s", record.name, entrega_id)
    else:
        result.entregas += 1
        logger.info("Created entrega %r", record.name)

    known[record.name] = int(entrega_id)
    return int(entrega_id)


async def _resolve_album(
    conn: asyncpg.Connection,
    record: NewAlbum,
    known: dict[str, int],
    result: ImportResult,
) -> int:
    existing_id = known.get(record.title)
    if existing_id is not None:
        logger.info("Album %r already exists, skipping", record.title)
        return existing_id

    album_id = await repository.insert_album_if_absent(record, conn=conn)
    if album_id is None:
        album_id = await repository.get_album_id(record.title, conn=conn)
        if album_id is None:
            raise StorageError(f"Album {record.title!r} conflicted but could not be read back.")
        logger.info("Album %r was created concurrently, reusing id %s", record.title, album_id)
    else:
        result.albums += 1
        logger.info("Created album %r", record.title)

    known[record.title] = int(album_id)
    return int(album_id)


async def _import_tracks(
    conn: asyncpg.Connection,
    tracks: list[NewTrack],
    entrega_positions: PositionMap,
    album_positions: PositionMap,
    result: ImportResult,
) -> None:
    seen: set[TrackKey] = await repository.track_keys(conn=conn)

    for track in tracks:
        entrega_id = entrega_positions.resolve(track.entrega_id)
        album_id = album_positions.resolve(track.album_id)

        key = (track.title, track.artist_name, entrega_id)
        if key in seen:
            continue

        resolved = track.model_copy(update={"entrega_id": entrega_id, "album_id": album_id})
        await repository.create_track(resolved, conn=conn)
        seen.add(key)
        result.tracks += 1


async def import_payload(payload: schemas.ImportPayload) -> ImportResult:
    """
    Insert whatever part of `payload` is not already stored, in one transaction.

    Entregas and albums are matched by name/title; the position of each one in
    the payload is mapped to its real id so tracks can reference them.
    Batches have no natural key and are always inserted.
    """
    result = ImportResult()

    async with db.transaction() as conn:
        for batch in payload.batches or []:
            await repository.create_batch(batch, conn=conn)
            result.batches += 1

        entrega_ids = await repository.entrega_ids_by_name(conn=conn)
        album_ids = await repository.album_ids_by_title(conn=conn)

        entrega_positions = PositionMap()
        for position, entrega in enumerate(payload.entregas or [], start=1):
            entrega_positions.record(position, await _resolve_entrega(conn, entrega, entrega_ids, result))

        album_positions = PositionMap()
        for position, album in enumerate(payload.albums or [], start=1):
            album_positions.record(position, await _resolve_album(conn, album, album_ids, result))

        await _import_tracks(conn, payload.tracks or [], entrega_positions, album_positions, result)

    if result.created_anything:
        logger.info(
            "Import committed: %d entrega(s), %d album(s), %d track(s), %d batch(es) created",
            result.entregas,
            result.albums,
            result.tracks,
            result.batches,
        )
    else:
        logger.info("All imported data already exists, nothing to add")
    return result


async def seed_once() -> ImportResult:
    """
    First-run seed. Skipped entirely when the store already holds any entrega.
    """
    result = ImportResult()

    async with db.transaction() as conn:
        if await repository.any_entrega_exists(conn=conn):
            logger.info("Catalog already has entregas, skipping seed")
            return result

        entrega = await repository.create_entrega(seed.SEED_ENTREGA, conn=conn)
        result.entregas += 1
        for track in seed.seed_tracks(int(entrega["id"])):
            await repository.create_track(track, conn=conn)
            result.tracks += 1

    logger.info("Seeded entrega %r with %d track(s)", seed.SEED_ENTREGA.name, result.tracks)
    return result


async def import_file(path: Path) -> ImportResult:
    try:
        raw = await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise PayloadError(f"Could not read import file {path}: {exc}") from exc
    logger.info("Importing initial data from %s", path)
    return await import_payload(parse_payload(raw))


async def bootstrap(*, seed_enabled: bool = True, init_data_path: Path | None = None) -> list[ImportResult]:
    """
    Startup loading: the coarse seed first, then the init file if there is one.
    """
    results: list[ImportResult] = []
    if seed_enabled:
        results.append(await seed_once())
    if init_data_path is not None and init_data_path.is_file():
        results.append(await import_file(init_data_path))
    return results
