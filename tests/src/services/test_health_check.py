"""Tests for HealthCheckService."""

import pytest
from unittest.mock import patch

from src.services.core.health_check import HealthCheckService


@pytest.mark.unit
class TestHealthCheckService:
    """Test suite for HealthCheckService."""

    @pytest.fixture
    def health_service(self, test_db):
        return HealthCheckService(test_db)

    @patch("src.services.core.health_check.BaseRepository")
    def test_check_database_healthy(self, mock_base_repo, health_service):
        """Test database check returns healthy when DB is accessible."""
        result = health_service._check_database()

        mock_base_repo.check_connection.assert_called_once()
        assert result["healthy"] is True
        assert "Database connection OK" in result["message"]

    @patch("src.services.core.health_check.BaseRepository")
    def test_check_database_unhealthy(self, mock_base_repo, health_service):
        """Test database check returns unhealthy when DB fails."""
        mock_base_repo.check_connection.side_effect = Exception("Connection refused")

        result = health_service._check_database()

        assert result["healthy"] is False
        assert "Database error" in result["message"]

    @patch("src.services.core.health_check.settings")
    def test_check_telegram_config_missing_token(self, mock_settings, health_service):
        mock_settings.TELEGRAM_BOT_TOKEN = ""

        result = health_service._check_telegram_config()

        assert result["healthy"] is False
        assert "token" in result["message"].lower()

    @patch("src.services.core.health_check.settings")
    def test_check_telegram_config_without_admins(self, mock_settings, health_service):
        mock_settings.TELEGRAM_BOT_TOKEN = "123456:ABC"
        mock_settings.admin_ids = set()

        result = health_service._check_telegram_config()

        assert result["healthy"] is True
        assert "no admin IDs" in result["message"]

    def test_templates_unsynced(self, health_service):
        result = health_service._check_templates()

        assert result["healthy"] is False
        assert "sync-templates" in result["message"]

    def test_templates_synced(self, health_service, synced_registry):
        result = health_service._check_templates()

        assert result["healthy"] is True
        assert result["stored_count"] == 3

    @patch("src.services.core.health_check.settings")
    def test_google_sheets_disabled_is_still_healthy(self, mock_settings, health_service):
        mock_settings.sheets_configured = False

        result = health_service._check_google_sheets()

        assert result == {
            "healthy": True,
            "message": "Disabled (not configured)",
            "enabled": False,
        }

    def test_check_all(self, health_service, synced_registry):
        result = health_service.check_all()

        assert result["status"] == "healthy"
        assert set(result["checks"]) == {"database", "telegram", "templates", "google_sheets"}
        assert "timestamp" in result

    def test_check_all_unhealthy_when_any_check_fails(self, health_service):
        result = health_service.check_all()

        assert result["status"] == "unhealthy"
        assert result["checks"]["templates"]["healthy"] is False
