"""Configuration for the report deletion subsystem."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DeletionSettings(BaseSettings):
    """Deletion settings from environment variables.

    Environment variables use the ``DELETION_`` prefix:
    - DELETION_UPLOADS_DIR: Directory holding uploaded report assets (default: uploads)
    """

    model_config = SettingsConfigDict(
        env_prefix="DELETION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    uploads_dir: Path = Field(
        default=Path("uploads"),
        description="Directory holding uploaded report images and videos",
    )


@lru_cache(maxsize=1)
def get_deletion_settings() -> DeletionSettings:
    """Cached DeletionSettings; clear with ``get_deletion_settings.cache_clear()``."""
    return DeletionSettings()
