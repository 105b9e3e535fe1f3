"""
Tests for the asyncpg helpers: URL cleanup, error wrapping, transactions.
"""

from __future__ import annotations

import pytest

from core import db
from core.errors import StorageError


class FakeTransaction:
    def __init__(self, conn: "FakeConnection") -> None:
        self.conn = conn

    async def start(self) -> None:
        self.conn.events.append("begin")

    async def commit(self) -> None:
        if self.conn.fail_commit:
            raise ConnectionResetError("connection lost during commit")
        self.conn.events.append("commit")

    async def rollback(self) -> None:
        self.conn.events.append("rollback")


class FakeConnection:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.fail_commit = False
        self.events: list[str] = []

    async def fetchrow(self, sql, *args):
        if self.fail:
            raise ConnectionResetError("connection lost")
        self.events.append("fetchrow")
        return {"id": 1}

    async def fetchval(self, sql, *args):
        self.events.append("fetchval")
        return 5

    def transaction(self) -> FakeTransaction:
        return FakeTransaction(self)


class FakePool:
    def __init__(self, conn: FakeConnection) -> None:
        self.conn = conn

    async def fetchrow(self, sql, *args):
        return await self.conn.fetchrow(sql, *args)

    async def acquire(self) -> FakeConnection:
        self.conn.events.append("acquire")
        return self.conn

    async def release(self, conn: FakeConnection) -> None:
        conn.events.append("release")


@pytest.fixture
def fake_conn(monkeypatch: pytest.MonkeyPatch) -> FakeConnection:
    conn = FakeConnection()
    monkeypatch.setattr(db, "_pool", FakePool(conn))
    return conn


class TestDatabaseUrl:
    def test_strips_sslmode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@h:5432/d?sslmode=require&application_name=x")
        assert db.database_url() == "postgresql://u:p@h:5432/d?application_name=x"

    def test_missing_url_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError):
            db.database_url()


class TestHelpers:
    async def test_fetch_one_returns_dict(self, fake_conn: FakeConnection) -> None:
        assert await db.fetch_one("SELECT 1") == {"id": 1}

    async def test_store_errors_become_storage_error(self, fake_conn: FakeConnection) -> None:
        fake_conn.fail = True
        with pytest.raises(StorageError) as info:
            await db.fetch_one("SELECT 1")
        assert isinstance(info.value.__cause__, ConnectionResetError)

    async def test_uninitialized_pool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(db, "_pool", None)
        with pytest.raises(RuntimeError):
            db.pool()


class TestTransaction:
    async def test_commits_on_success(self, fake_conn: FakeConnection) -> None:
        async with db.transaction() as conn:
            assert await db.fetch_val("SELECT 5", conn=conn) == 5
        assert fake_conn.events == ["acquire", "begin", "fetchval", "commit", "release"]

    async def test_rolls_back_on_error(self, fake_conn: FakeConnection) -> None:
        with pytest.raises(StorageError):
            async with db.transaction() as conn:
                await db.fetch_val("SELECT 5", conn=conn)
                raise StorageError("boom")
        assert fake_conn.events == ["acquire", "begin", "fetchval", "rollback", "release"]

    async def test_errors_from_the_block_keep_their_type(self, fake_conn: FakeConnection) -> None:
        with pytest.raises(FileNotFoundError):
            async with db.transaction():
                raise FileNotFoundError("init_data.json")
        assert fake_conn.events == ["acquire", "begin", "rollback", "release"]

    async def test_commit_failure_is_storage_error(self, fake_conn: FakeConnection) -> None:
        fake_conn.fail_commit = True
        with pytest.raises(StorageError) as info:
            async with db.transaction():
                pass
        assert isinstance(info.value.__cause__, ConnectionResetError)
        assert fake_conn.events[-1] == "release"
