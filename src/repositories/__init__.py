"""Repository layer - database access."""

from src.repositories.base_repository import BaseRepository
from src.repositories.user_repository import UserRepository
from src.repositories.team_repository import TeamRepository
from src.repositories.template_repository import TemplateRepository
from src.repositories.report_repository import ReportRepository
from src.repositories.sheet_columns_repository import SheetColumnsRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "TeamRepository",
    "TemplateRepository",
    "ReportRepository",
    "SheetColumnsRepository",
]
