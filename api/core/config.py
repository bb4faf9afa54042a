"""
Environment-driven settings.

Everything is read lazily so tests can monkeypatch `os.environ` per case.
Malformed values fall back to the default instead of failing startup.
"""

from __future__ import annotations

import os

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


def db_pool_min_size() -> int:
    return max(env_int("DB_POOL_MIN_SIZE", 1), 1)


def db_pool_max_size() -> int:
    return max(env_int("DB_POOL_MAX_SIZE", 5), db_pool_min_size())


def db_command_timeout_s() -> float:
    return env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def init_schema_on_startup() -> bool:
    return env_bool("DB_INIT_SCHEMA", False)


def seed_on_startup() -> bool:
    return env_bool("DB_SEED_SAMPLE_DATA", False)


def admin_routes_enabled() -> bool:
    return env_bool("ADMIN_ROUTES_ENABLED", False)


def auth_required() -> bool:
    return env_bool("AUTH_REQUIRED", False)


def cors_origins() -> list[str]:
    raw = env_str("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    if raw == "*":
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()


def api_host() -> str:
    return env_str("API_HOST", "0.0.0.0")


def api_port() -> int:
    return env_int("API_PORT", 8080)
