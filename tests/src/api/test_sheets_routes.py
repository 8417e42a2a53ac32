"""Tests for the /sheets and /health endpoints."""

from unittest.mock import MagicMock, patch

import pytest

from src.api.app import app
from src.api.dependencies import get_sheets_service
from src.exceptions import GoogleSheetsError, GoogleSheetsNotConfiguredError
from src.services.integrations.google_sheets import GoogleSheetsService


@pytest.fixture
def sheets_service():
    service = GoogleSheetsService(
        spreadsheet_id="sheet123", service_account_info={"type": "service_account"}
    )
    app.dependency_overrides[get_sheets_service] = lambda: service
    return service


@pytest.mark.unit
class TestSheetsRoutes:
    def test_link_when_not_configured(self, client):
        app.dependency_overrides[get_sheets_service] = lambda: MagicMock(is_configured=False)

        response = client.get("/sheets")

        assert response.json() == {"url": "#", "configured": False}

    def test_link_to_spreadsheet(self, client, sheets_service):
        response = client.get("/sheets")

        assert response.json() == {
            "url": "https://docs.google.com/spreadsheets/d/sheet123/edit",
            "configured": True,
            "spreadsheetId": "sheet123",
        }

    def test_link_to_team_tab(self, client, sheets_service):
        response = client.get("/sheets", params={"team": "Ops & Support"})

        assert response.json()["url"].endswith("range=Team_Ops___Support")

    def test_info(self, client, sheets_service):
        info = {"spreadsheetId": "sheet123", "title": "Reports", "sheets": []}
        with patch.object(sheets_service, "get_spreadsheet_info", return_value=info):
            response = client.get("/sheets/info")

        assert response.status_code == 200
        assert response.json() == info

    def test_info_not_configured_is_503(self, client, sheets_service):
        with patch.object(
            sheets_service,
            "get_spreadsheet_info",
            side_effect=GoogleSheetsNotConfiguredError(),
        ):
            assert client.get("/sheets/info").status_code == 503

    def test_info_api_error_is_502(self, client, sheets_service):
        with patch.object(
            sheets_service,
            "get_spreadsheet_info",
            side_effect=GoogleSheetsError("API error", status_code=500),
        ):
            assert client.get("/sheets/info").status_code == 502


@pytest.mark.unit
class TestHealthRoute:
    def test_health_ok(self, client):
        assert client.get("/health").json() == {"status": "ok", "database": "ok"}

    @patch("src.api.routes.health.BaseRepository.check_connection")
    def test_health_degraded(self, mock_check, client):
        mock_check.side_effect = RuntimeError("connection refused")

        assert client.get("/health").json() == {"status": "degraded", "database": "error"}
