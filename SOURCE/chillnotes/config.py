"""
Configuration module for the notes service.

The application reads its configuration primarily from environment
variables, with sensible defaults to make local development simple.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional
from pathlib import Path


class Settings:
    """Defines runtime configuration for the notes service."""

    # Flask / server
    debug: bool = False
    secret_key: str = "change-me-in-production"
    api_prefix: str = "/api"
    host: str = "127.0.0.1"
    port: int = 5000

    # Storage
    database_url: str = (
        f"sqlite:///{Path(__file__).resolve().parent / 'notes.db'}"
    )
    storage_key: str = "@my_notes"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    def update_from_env(self) -> None:
        """Override defaults with values from the environment."""
        import os

        self.debug = _as_bool(os.getenv("CHILLNOTES_DEBUG"), self.debug)
        self.secret_key = os.getenv("CHILLNOTES_SECRET_KEY", self.secret_key)
        self.api_prefix = os.getenv("API_PREFIX", self.api_prefix)
        self.host = os.getenv("CHILLNOTES_HOST", self.host)
        self.port = int(os.getenv("CHILLNOTES_PORT", str(self.port)))

        self.database_url = os.getenv("DATABASE_URL", self.database_url)
        self.storage_key = os.getenv("NOTES_STORAGE_KEY", self.storage_key)

        self.log_level = os.getenv("LOG_LEVEL", self.log_level)
        self.log_json = _as_bool(os.getenv("LOG_JSON"), self.log_json)


def _as_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes"}


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of Settings populated from environment."""
    settings = Settings()
    settings.update_from_env()
    return settings


__all__ = ["Settings", "get_settings"]
