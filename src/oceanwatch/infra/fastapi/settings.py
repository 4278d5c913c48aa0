"""Application settings for the OceanWatch FastAPI app factory."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_version() -> str:
    """Resolve default app version from package metadata."""
    try:
        from importlib.metadata import version

        return version("oceanwatch-deletion")
    except Exception:
        return "0.0.0"


class AppSettings(BaseSettings):
    """Application factory settings.

    Environment variables use the ``APP_`` prefix (e.g., ``APP_TITLE``).
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        extra="ignore",
    )

    title: str = Field(default="OceanWatch")
    version: str = Field(default=_default_version())
    description: str = Field(default="Hazard report administration API")
    docs_url: str | None = Field(default="/docs")
    openapi_url: str | None = Field(default="/openapi.json")
    debug: bool = Field(default=False)
    configure_logging: bool = Field(
        default=True, description="Install structlog handlers on startup"
    )
