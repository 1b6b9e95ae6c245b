"""Tests pour Settings et configure_logging."""

from pathlib import Path

import pytest
from loguru import logger
from pydantic import ValidationError

from src.config import Settings
from src.logging_config import configure_logging


class TestSettings:
    """Tests pour Settings (pydantic-settings)."""

    def test_defaults(self, monkeypatch):
        for name in ("HOLOCRON_DATABASE_URL", "HOLOCRON_SWAPI_BASE_URL", "HOLOCRON_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.swapi_base_url == "https://swapi.dev/api"
        assert settings.swapi_verify_ssl is True
        assert settings.sync_cron_hour == 0
        assert settings.sync_cron_minute == 0

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("HOLOCRON_SWAPI_BASE_URL", "https://mirror.test/api/")
        monkeypatch.setenv("HOLOCRON_SYNC_SCHEDULE_ENABLED", "false")

        settings = Settings(_env_file=None)

        assert settings.swapi_base_url == "https://mirror.test/api"
        assert settings.sync_schedule_enabled is False

    def test_cron_hour_validation(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, sync_cron_hour=24)

    def test_log_file_expands_home(self):
        settings = Settings(_env_file=None, log_file="~/holocron.log")
        assert "~" not in str(settings.log_file)


class TestConfigureLogging:
    """Tests pour configure_logging (loguru)."""

    def test_file_sink_writes_json(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "holocron.log"

        configure_logging(log_level="WARNING", log_file=log_file)
        logger.info("Synchronisation du catalogue demarree")
        logger.complete()

        assert log_file.exists()
        assert '"Synchronisation du catalogue demarree"' in log_file.read_text()

        logger.remove()

    def test_console_only(self, tmp_path: Path):
        configure_logging(log_file=None)
        assert not any(tmp_path.iterdir())
        logger.remove()
