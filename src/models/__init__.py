"""SQLAlchemy models."""
from src.models.user import User
from src.models.team import Team
from src.models.template import Template
from src.models.report import Report
from src.models.sheet_columns import SheetColumns

__all__ = [
    "User",
    "Team",
    "Template",
    "Report",
    "SheetColumns",
]
