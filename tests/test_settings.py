"""Unit tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from oceanwatch.domain.reports.settings import DeletionSettings, get_deletion_settings
from oceanwatch.infra.fastapi import AppSettings


class TestDeletionSettings:
    @pytest.mark.unit
    def test_default_uploads_dir(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = DeletionSettings(_env_file=None)  # type: ignore[call-arg]
            assert settings.uploads_dir == Path("uploads")

    @pytest.mark.unit
    def test_uploads_dir_from_env(self) -> None:
        with patch.dict("os.environ", {"DELETION_UPLOADS_DIR": "/srv/oceanwatch/uploads"}):
            settings = DeletionSettings(_env_file=None)  # type: ignore[call-arg]
            assert settings.uploads_dir == Path("/srv/oceanwatch/uploads")

    @pytest.mark.unit
    def test_cached_accessor(self) -> None:
        get_deletion_settings.cache_clear()
        try:
            assert get_deletion_settings() is get_deletion_settings()
        finally:
            get_deletion_settings.cache_clear()


class TestAppSettings:
    @pytest.mark.unit
    def test_defaults(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = AppSettings()
            assert settings.title == "OceanWatch"
            assert settings.configure_logging is True
            assert settings.debug is False

    @pytest.mark.unit
    def test_from_env(self) -> None:
        env = {"APP_TITLE": "OceanWatch Admin", "APP_CONFIGURE_LOGGING": "false"}
        with patch.dict("os.environ", env, clear=True):
            settings = AppSettings()
            assert settings.title == "OceanWatch Admin"
            assert settings.configure_logging is False
