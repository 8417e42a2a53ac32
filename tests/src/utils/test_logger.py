"""Tests for logger utility."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from src.utils.logger import LOGGER_NAME, get_logger, logger, setup_logger


@pytest.fixture
def log_settings(tmp_path):
    with patch("src.utils.logger.settings") as mock_settings:
        mock_settings.LOG_LEVEL = "INFO"
        mock_settings.LOG_DIR = str(tmp_path)
        yield mock_settings


def _flush(logger_instance):
    for handler in logger_instance.handlers:
        handler.flush()


@pytest.mark.unit
class TestLogger:
    """Test suite for logger utility."""

    def test_default_logger_name(self):
        assert logger.name == LOGGER_NAME
        assert logger.propagate is False

    def test_level_from_settings(self, log_settings):
        log_settings.LOG_LEVEL = "warning"

        assert setup_logger("settings_level_logger").level == logging.WARNING

    def test_log_dir_adds_app_log_file(self, log_settings, tmp_path):
        """Without an explicit log_file, LOG_DIR decides where app.log goes."""
        app_logger = setup_logger("log_dir_logger")

        app_logger.info("Report saved")
        _flush(app_logger)

        content = (tmp_path / "app.log").read_text()
        assert "Report saved" in content
        assert "INFO" in content
        assert "test_logger.py" in content

    def test_empty_log_dir_disables_file_output(self, log_settings):
        log_settings.LOG_DIR = ""

        console_logger = setup_logger("console_only_logger")

        assert [type(h) for h in console_logger.handlers] == [logging.StreamHandler]

    def test_explicit_log_file_creates_directory(self, log_settings, tmp_path):
        log_file = tmp_path / "nested" / "sync.log"

        setup_logger("explicit_file_logger", log_file=str(log_file))

        assert log_file.parent.exists()

    def test_level_filters_file_output(self, log_settings, tmp_path):
        log_file = tmp_path / "warnings.log"
        quiet_logger = setup_logger(
            "warning_logger", level=logging.WARNING, log_file=str(log_file)
        )

        quiet_logger.info("Synced report")
        quiet_logger.warning("Sheets sync failed")
        _flush(quiet_logger)

        content = Path(log_file).read_text()
        assert "Synced report" not in content
        assert "Sheets sync failed" in content

    def test_setup_is_idempotent(self, log_settings):
        first = setup_logger("idempotent_logger")
        second = setup_logger("idempotent_logger")

        assert first is second
        assert len(second.handlers) == 2

    def test_get_logger_reuses_configured_logger(self, log_settings):
        configured = setup_logger("existing_logger")

        assert get_logger("existing_logger") is configured
