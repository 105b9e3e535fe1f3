"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Every helper accepts an optional `conn`. Without it the statement runs on the
pool and auto-commits; with it the statement joins the caller's transaction
(see `transaction()`).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings
from .errors import StorageError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

# Failures that mean "the store could not do what we asked".
_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = settings.database_url()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    try:
        _pool = await asyncpg.create_pool(
            dsn=database_url(),
            min_size=1,
            max_size=settings.pool_max_size(),
            command_timeout=settings.command_timeout_s(),
        )
    except _STORE_ERRORS as exc:
        raise StorageError(f"Could not connect to database: {exc}") from exc


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


@asynccontextmanager
async def transaction() -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire a connection and run everything inside one transaction.

    Commits when the block exits normally; any exception (including task
    cancellation) rolls the whole transaction back before it propagates.
    Only failures of acquire/begin/commit are reported as StorageError;
    exceptions raised by the block itself propagate unchanged.
    """
    try:
        conn = await pool().acquire()
    except _STORE_ERRORS as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc

    try:
        tx = conn.transaction()
        try:
            await tx.start()
        except _STORE_ERRORS as exc:
            raise StorageError(str(exc) or exc.__class__.__name__) from exc

        try:
            yield conn
        except BaseException:
            try:
                await tx.rollback()
            except _STORE_ERRORS:
                logger.exception("Rollback failed")
            raise

        try:
            await tx.commit()
        except _STORE_ERRORS as exc:
            raise StorageError(str(exc) or exc.__class__.__name__) from exc
    finally:
        await pool().release(conn)


async def fetch_one(sql: str, *args: Any, conn: asyncpg.Connection | None = None) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    try:
        row = await (conn or pool()).fetchrow(sql, *args)
    except _STORE_ERRORS as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any, conn: asyncpg.Connection | None = None) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        rows = await (conn or pool()).fetch(sql, *args)
    except _STORE_ERRORS as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc
    return [_record_to_dict(r) for r in rows]


async def fetch_val(sql: str, *args: Any, conn: asyncpg.Connection | None = None) -> Any:
    try:
        return await (conn or pool()).fetchval(sql, *args)
    except _STORE_ERRORS as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc


async def execute(sql: str, *args: Any, conn: asyncpg.Connection | None = None) -> str:
    """
    Run a statement (INSERT/UPDATE/DDL). Returns the status tag, e.g. "UPDATE 1".
    """
    try:
        return await (conn or pool()).execute(sql, *args)
    except _STORE_ERRORS as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc


async def apply_schema(path: Path = SCHEMA_PATH) -> None:
    """
    Create the catalog tables if they do not exist yet.
    """
    logger.info("Applying schema from %s", path)
    await execute(path.read_text(encoding="utf-8"))
