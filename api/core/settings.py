"""
Environment-driven settings.

Every value is read on call so tests (and a restarted worker) pick up
changes in `os.environ` without a reload.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


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
    if not raw:
        return default
    return raw not in {"0", "false", "no", "off"}


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def db_pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout_s() -> int:
    return _env_int("DB_COMMAND_TIMEOUT_S", 30)


def db_auto_schema() -> bool:
    return _env_bool("DB_AUTO_SCHEMA", True)


def session_cookie_name() -> str:
    return _env_str("SESSION_COOKIE_NAME", "SESSION")


def session_ttl_minutes() -> int:
    # Same inactivity window as a servlet container's default session.
    return max(1, _env_int("SESSION_TTL_MINUTES", 30))


def session_cookie_secure() -> bool:
    return _env_bool("SESSION_COOKIE_SECURE", False)


def session_cookie_samesite() -> str:
    value = _env_str("SESSION_COOKIE_SAMESITE", "lax").lower()
    if value not in {"lax", "strict", "none"}:
        return "lax"
    return value


def bcrypt_rounds() -> int:
    # bcrypt accepts 4..31.
    return min(31, max(4, _env_int("BCRYPT_ROUNDS", 12)))
