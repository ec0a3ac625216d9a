"""
Settings loaded from environment variables.

All variables share the TASK_MANAGER_ prefix. The default database URL
points at an in-memory SQLite database, so tasks live for the lifetime of
the process only. Malformed values raise a pydantic ValidationError when
settings are first loaded.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

ENV_PREFIX = "TASK_MANAGER_"

DEFAULT_DATABASE_URL = "sqlite://"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Runtime settings for the transports and the storage layer."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        case_sensitive=False,
        frozen=True,
    )

    # Only SQLite is supported: the title filter relies on SQLite's instr()
    database_url: str = Field(DEFAULT_DATABASE_URL, description="SQLAlchemy SQLite URL")
    debug: bool = Field(False, description="Debug logging of transport calls")
    log_level: str = Field("INFO", description="Root log level")
    host: str = Field("127.0.0.1", description="HTTP bind host")
    port: int = Field(8000, ge=1, le=65535, description="HTTP bind port")

    @field_validator("database_url")
    @classmethod
    def _require_sqlite(cls, value: str) -> str:
        try:
            backend = make_url(value).get_backend_name()
        except ArgumentError as e:
            raise ValueError(f"invalid database URL {value!r}") from e
        if backend != "sqlite":
            raise ValueError(f"only sqlite database URLs are supported, got {backend!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get the process-wide settings, reading the environment on first use."""
    return Settings()


def reset_settings() -> None:
    """Forget cached settings (for testing)."""
    get_settings.cache_clear()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging for an entry point."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
