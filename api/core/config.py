"""
Environment-driven settings.

Every setting is read on demand so tests can override it with monkeypatch.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_DB_POOL_MIN_SIZE = 1
DEFAULT_DB_POOL_MAX_SIZE = 5
DEFAULT_DB_COMMAND_TIMEOUT = 30
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")

# Applied when `limit` / `offset` are absent or not parseable.
PAGINATION_DEFAULTS = {
    "limit": 10,
    "offset": 0,
}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def db_pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", DEFAULT_DB_POOL_MIN_SIZE), 0)


def db_pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", DEFAULT_DB_POOL_MAX_SIZE), 1)


def db_command_timeout() -> int:
    return _env_int("DB_COMMAND_TIMEOUT", DEFAULT_DB_COMMAND_TIMEOUT)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
