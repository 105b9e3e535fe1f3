"""
Shared fixtures.

`FakeCatalogStore` stands in for Postgres: it implements the functions of
`catalog.repository` over in-memory tables and replaces `core.db.transaction`
with a snapshot/rollback context manager, so importer and HTTP tests run
without a database.
"""

from __future__ import annotations

import copy
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from catalog import repository, schemas
from core import db
from core.errors import StorageError

TABLES = ("artists", "albums", "tracks", "batches", "entregas")

# Natural keys enforced by UNIQUE constraints in schema.sql.
UNIQUE_COLUMNS = {"albums": "title", "entregas": "name"}

REPOSITORY_FUNCTIONS = (
    "list_artists",
    "create_artist",
    "update_artist",
    "list_albums",
    "create_album",
    "update_album",
    "insert_album_if_absent",
    "album_ids_by_title",
    "get_album_id",
    "list_tracks",
    "create_track",
    "update_track",
    "track_keys",
    "list_batches",
    "create_batch",
    "update_batch",
    "list_entregas",
    "create_entrega",
    "update_entrega",
    "insert_entrega_if_absent",
    "entrega_ids_by_name",
    "get_entrega_id",
    "any_entrega_exists",
)


class FakeCatalogStore:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {name: [] for name in TABLES}
        self.next_ids: dict[str, int] = {name: 1 for name in TABLES}
        self.insert_attempts: dict[str, int] = defaultdict(int)
        # table -> 1-based insert attempt that raises StorageError
        self.fail_on: dict[str, int] = {}
        self.transactions_opened = 0
        self.rollbacks = 0

    # -- helpers ------------------------------------------------------------

    def rows(self, table: str) -> list[dict[str, Any]]:
        return [dict(r) for r in self.tables[table]]

    def add(self, table: str, **values: Any) -> dict[str, Any]:
        """Insert a row directly, bypassing fault injection."""
        row = {"id": self.next_ids[table], **values}
        self.next_ids[table] += 1
        self.tables[table].append(row)
        return dict(row)

    def _insert(self, table: str, values: dict[str, Any]) -> dict[str, Any]:
        self.insert_attempts[table] += 1
        if self.fail_on.get(table) == self.insert_attempts[table]:
            raise StorageError(f"simulated storage fault inserting into {table}")
        unique = UNIQUE_COLUMNS.get(table)
        if unique and any(r[unique] == values[unique] for r in self.tables[table]):
            raise StorageError(f"duplicate key value violates unique constraint on {table}.{unique}")
        return self.add(table, **values)

    def _update(self, table: str, row_id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        for row in self.tables[table]:
            if row["id"] == row_id:
                row.update(values)
                return dict(row)
        return None

    def _find(self, table: str, column: str, value: Any) -> dict[str, Any] | None:
        return next((r for r in self.tables[table] if r[column] == value), None)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[object]:
        snapshot = copy.deepcopy((self.tables, self.next_ids))
        self.transactions_opened += 1
        try:
            yield object()
        except BaseException:
            self.tables, self.next_ids = snapshot
            self.rollbacks += 1
            raise

    # -- artists ------------------------------------------------------------

    async def list_artists(self, *, conn: Any = None) -> list[dict[str, Any]]:
        return sorted(self.rows("artists"), key=lambda r: r["id"])

    async def create_artist(self, record: schemas.NewArtist, *, conn: Any = None) -> dict[str, Any]:
        return self._insert("artists", record.model_dump())

    async def update_artist(self, artist_id: int, record: schemas.NewArtist, *, conn: Any = None):
        return self._update("artists", artist_id, record.model_dump())

    # -- albums -------------------------------------------------------------

    async def list_albums(self, *, conn: Any = None) -> list[dict[str, Any]]:
        return sorted(self.rows("albums"), key=lambda r: r["id"])

    async def create_album(self, record: schemas.NewAlbum, *, conn: Any = None) -> dict[str, Any]:
        return self._insert("albums", record.model_dump())

    async def update_album(self, album_id: int, record: schemas.NewAlbum, *, conn: Any = None):
        return self._update("albums", album_id, record.model_dump())

    async def insert_album_if_absent(self, record: schemas.NewAlbum, *, conn: Any = None) -> int | None:
        if self._find("albums", "title", record.title) is not None:
            return None
        return self._insert("albums", record.model_dump())["id"]

    async def album_ids_by_title(self, *, conn: Any = None) -> dict[str, int]:
        return {r["title"]: r["id"] for r in self.tables["albums"]}

    async def get_album_id(self, title: str, *, conn: Any = None) -> int | None:
        row = self._find("albums", "title", title)
        return row["id"] if row else None

    # -- tracks -------------------------------------------------------------

    async def list_tracks(self, *, conn: Any = None) -> list[dict[str, Any]]:
        # Postgres sorts NULL positions last.
        return sorted(
            self.rows("tracks"),
            key=lambda r: (r["position"] is None, r["position"] or "", r["id"]),
        )

    async def create_track(self, record: schemas.NewTrack, *, conn: Any = None) -> dict[str, Any]:
        return self._insert("tracks", record.model_dump())

    async def update_track(self, track_id: int, record: schemas.NewTrack, *, conn: Any = None):
        return self._update("tracks", track_id, record.model_dump())

    async def track_keys(self, *, conn: Any = None) -> set[tuple[str, str, int | None]]:
        return {(r["title"], r["artist_name"], r["entrega_id"]) for r in self.tables["tracks"]}

    # -- batches ------------------------------------------------------------

    async def list_batches(self, *, conn: Any = None) -> list[dict[str, Any]]:
        return sorted(self.rows("batches"), key=lambda r: r["id"])

    async def create_batch(self, record: schemas.NewBatch, *, conn: Any = None) -> dict[str, Any]:
        return self._insert("batches", record.model_dump())

    async def update_batch(self, batch_id: int, record: schemas.NewBatch, *, conn: Any = None):
        return self._update("batches", batch_id, record.model_dump())

    # -- entregas -----------------------------------------------------------

    async def list_entregas(self, *, conn: Any = None) -> list[dict[str, Any]]:
        return sorted(self.rows("entregas"), key=lambda r: r["id"])

    async def create_entrega(self, record: schemas.NewEntrega, *, conn: Any = None) -> dict[str, Any]:
        return self._insert("entregas", record.model_dump())

    async def update_entrega(self, entrega_id: int, record: schemas.NewEntrega, *, conn: Any = None):
        return self._update("entregas", entrega_id, record.model_dump())

    async def insert_entrega_if_absent(self, record: schemas.NewEntrega, *, conn: Any = None) -> int | None:
        if self._find("entregas", "name", record.name) is not None:
            return None
        return self._insert("entregas", record.model_dump())["id"]

    async def entrega_ids_by_name(self, *, conn: Any = None) -> dict[str, int]:
        return {r["name"]: r["id"] for r in self.tables["entregas"]}

    async def get_entrega_id(self, name: str, *, conn: Any = None) -> int | None:
        row = self._find("entregas", "name", name)
        return row["id"] if row else None

    async def any_entrega_exists(self, *, conn: Any = None) -> bool:
        return bool(self.tables["entregas"])


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> FakeCatalogStore:
    """An empty in-memory store patched over the repository layer."""
    fake = FakeCatalogStore()
    for name in REPOSITORY_FUNCTIONS:
        monkeypatch.setattr(repository, name, getattr(fake, name))
    monkeypatch.setattr(db, "transaction", fake.transaction)
    return fake


@pytest.fixture
def articles_dir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    directory = tmp_path / "articles"
    directory.mkdir()
    monkeypatch.setenv("ARTICLES_DIR", str(directory))
    return directory


@pytest.fixture
async def client(store: FakeCatalogStore) -> AsyncClient:
    """HTTP client against the app; lifespan (pool, seed) is not run."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
