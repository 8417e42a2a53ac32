"""Tests for validators utility."""
import pytest
from unittest.mock import patch

from src.utils.validators import ConfigValidator


@pytest.fixture
def mock_settings():
    """Settings double holding a valid configuration."""
    with patch("src.utils.validators.settings") as mock:
        mock.TELEGRAM_BOT_TOKEN = "123456:ABC-DEF1234ghIkl"
        mock.TELEGRAM_ADMIN_IDS = "99, 100"
        mock.TELEGRAM_TIMEOUT_SECONDS = 10.0
        mock.PUBLIC_APP_URL = "https://reports.example.com"
        mock.GOOGLE_SHEETS_ID = None
        mock.GOOGLE_SERVICE_ACCOUNT_JSON = None
        mock.GOOGLE_SERVICE_ACCOUNT_FILE = None
        mock.GOOGLE_SHEETS_TIMEOUT_SECONDS = 15.0
        mock.DATABASE_URL = "sqlite://"
        mock.DB_NAME = "team_reports"
        yield mock


@pytest.mark.unit
class TestConfigValidator:
    """Test suite for ConfigValidator."""

    def test_valid_configuration(self, mock_settings):
        is_valid, errors = ConfigValidator.validate_all()

        assert is_valid is True
        assert errors == []

    def test_missing_bot_token(self, mock_settings):
        mock_settings.TELEGRAM_BOT_TOKEN = ""

        is_valid, errors = ConfigValidator.validate_all()

        assert is_valid is False
        assert any("TELEGRAM_BOT_TOKEN" in error for error in errors)

    def test_non_numeric_admin_ids(self, mock_settings):
        mock_settings.TELEGRAM_ADMIN_IDS = "99,@boss, ,-5"

        is_valid, errors = ConfigValidator.validate_all()

        assert is_valid is False
        assert errors == ["TELEGRAM_ADMIN_IDS contains non-numeric entries: @boss"]

    @pytest.mark.parametrize("url", ["reports.example.com", "ftp://reports.example.com", ""])
    def test_public_app_url_must_be_absolute_http(self, mock_settings, url):
        mock_settings.PUBLIC_APP_URL = url

        is_valid, errors = ConfigValidator.validate_all()

        assert is_valid is False
        assert any("PUBLIC_APP_URL" in error for error in errors)

    def test_sheets_id_without_credentials(self, mock_settings):
        mock_settings.GOOGLE_SHEETS_ID = "sheet123"

        is_valid, errors = ConfigValidator.validate_all()

        assert is_valid is False
        assert any("GOOGLE_SHEETS_ID" in error for error in errors)

    def test_sheets_with_credential_file(self, mock_settings):
        mock_settings.GOOGLE_SHEETS_ID = "sheet123"
        mock_settings.GOOGLE_SERVICE_ACCOUNT_FILE = "/etc/sa.json"

        assert ConfigValidator.validate_all() == (True, [])

    def test_timeouts_must_be_positive(self, mock_settings):
        mock_settings.TELEGRAM_TIMEOUT_SECONDS = 0
        mock_settings.GOOGLE_SHEETS_TIMEOUT_SECONDS = -1

        is_valid, errors = ConfigValidator.validate_all()

        assert is_valid is False
        assert len(errors) == 2

    def test_database_required(self, mock_settings):
        mock_settings.DATABASE_URL = None
        mock_settings.DB_NAME = ""

        is_valid, errors = ConfigValidator.validate_all()

        assert is_valid is False
        assert "DATABASE_URL or DB_NAME is required" in errors
