"""
Environment-driven settings.

Values are read on every call so tests can override them with monkeypatch.
"""

from __future__ import annotations

import os
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def pool_max_size() -> int:
    return max(1, _env_int("DB_POOL_MAX_SIZE", 5))


def command_timeout_s() -> int:
    return _env_int("DB_COMMAND_TIMEOUT_S", 30)


def articles_dir() -> Path:
    return Path(_env_str("ARTICLES_DIR", "./articles"))


def init_data_path() -> Path:
    return Path(_env_str("INIT_DATA_PATH", "./init_data.json"))


def seed_on_startup() -> bool:
    return _env_bool("SEED_ON_STARTUP", True)


def apply_schema_on_startup() -> bool:
    return _env_bool("APPLY_SCHEMA", True)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def host() -> str:
    return _env_str("HOST", "127.0.0.1")


def port() -> int:
    return _env_int("PORT", 3000)
