from __future__ import annotations

import os
from dataclasses import dataclass


class ConfigError(RuntimeError):
    """Required configuration is missing or unusable. Raised at startup only."""


@dataclass(frozen=True)
class Settings:
    env: str
    database_url: str
    log_level: str

    db_pool_size: int
    db_max_overflow: int
    db_pool_timeout: int
    db_statement_timeout_ms: int | None

    @property
    def is_production(self) -> bool:
        return self.env in ("prod", "production")

    @property
    def is_postgres(self) -> bool:
        return self.database_url.startswith("postgres")


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer (got {raw!r}).") from e


def load_settings() -> Settings:
    # DB_CONNECTION is the legacy name for the connection string.
    database_url = _getenv("DATABASE_URL") or _getenv("DB_CONNECTION")
    if not database_url:
        raise ConfigError("DATABASE_URL is required (legacy name: DB_CONNECTION).")

    env = _getenv("ENV", "development").lower()
    if env in ("prod", "production") and database_url.startswith("sqlite"):
        raise ConfigError("DATABASE_URL must not be sqlite in production.")

    timeout_ms = _getenv_int("DB_STATEMENT_TIMEOUT_MS", 0)
    return Settings(
        env=env,
        database_url=database_url,
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
        db_pool_size=_getenv_int("DB_POOL_SIZE", 5),
        db_max_overflow=_getenv_int("DB_MAX_OVERFLOW", 10),
        db_pool_timeout=_getenv_int("DB_POOL_TIMEOUT", 30),
        db_statement_timeout_ms=timeout_ms or None,
    )


def load_config(settings: Settings | None = None) -> dict:
    s = settings or load_settings()
    return {
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "LOG_LEVEL": s.log_level,
        "SETTINGS": s,
    }
