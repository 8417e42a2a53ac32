"""FastAPI dependencies shared by the routers.

Tests swap these out through app.dependency_overrides.
"""

from src.config.database import get_db
from src.services.core.template_registry import TemplateRegistry, template_registry
from src.services.integrations.google_sheets import GoogleSheetsService

__all__ = ["get_db", "get_sheets_service", "get_template_registry"]


def get_sheets_service() -> GoogleSheetsService:
    """A Google Sheets client built from the current settings."""
    return GoogleSheetsService()


def get_template_registry() -> TemplateRegistry:
    """The process-wide template catalog."""
    return template_registry
