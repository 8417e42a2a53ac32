"""Legacy import service - load the old JSON file store into the database.

The file store kept three arrays (users.json, teams.json, reports.json)
with camelCase keys. Values under keys ending in "At" or "Date" are
ISO-8601 strings.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from dateutil.parser import isoparse
from sqlalchemy.orm import Session

from src.config.constants import (
    DEFAULT_REPORT_PRIORITY,
    DEFAULT_REPORT_STATUS,
    PLACEHOLDER_FIRST_NAME,
    ROLE_ADMIN,
    ROLE_EMPLOYEE,
)
from src.models.report import Report
from src.models.team import Team
from src.models.user import User
from src.repositories.report_repository import ReportRepository
from src.repositories.team_repository import TeamRepository
from src.repositories.user_repository import UserRepository
from src.services.base_service import BaseService
from src.services.core.identity_service import IdentityService
from src.services.core.template_registry import TemplateRegistry, template_registry
from src.utils.logger import logger

DATE_KEY_SUFFIXES = ("At", "Date")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO-8601 string -> naive UTC datetime; None when missing or unparseable."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = isoparse(value.strip())
        except (ValueError, OverflowError):
            logger.warning(f"Unparseable timestamp in legacy data: {value!r}")
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def revive_dates(record: dict[str, Any]) -> dict[str, Any]:
    """Parse the date-valued keys of one legacy record."""
    return {
        key: parse_timestamp(value) if key.endswith(DATE_KEY_SUFFIXES) else value
        for key, value in record.items()
    }


@dataclass
class ImportResult:
    """Per-entity counts of rows inserted and rows skipped as already present."""

    imported: dict[str, int] = field(
        default_factory=lambda: {"teams": 0, "users": 0, "reports": 0}
    )
    skipped: dict[str, int] = field(
        default_factory=lambda: {"teams": 0, "users": 0, "reports": 0}
    )
    placeholders: int = 0

    def count(self, entity: str, inserted: bool):
        bucket = self.imported if inserted else self.skipped
        bucket[entity] += 1


class LegacyImportService(BaseService):
    """Copies legacy JSON records into the database, keeping their IDs.

    Re-running an import skips rows whose IDs already exist.
    """

    def __init__(
        self, db: Optional[Session] = None, registry: Optional[TemplateRegistry] = None
    ):
        super().__init__()
        self.db = db
        self.registry = registry or template_registry
        self.team_repo = TeamRepository(db)
        self.user_repo = UserRepository(db)
        self.report_repo = ReportRepository(db)
        self.identity_service = IdentityService(db)

    @staticmethod
    def load_file(path: Path) -> list[dict[str, Any]]:
        """Read one legacy array; a missing file counts as empty.

        Raises:
            ValueError: If the file is not a JSON array
        """
        if not path.exists():
            logger.info(f"No legacy file at {path}, skipping")
            return []

        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"{path.name} must contain a JSON array")
        return [revive_dates(record) for record in data if isinstance(record, dict)]

    def import_directory(self, data_dir: Path) -> ImportResult:
        """Import users.json, teams.json and reports.json from a directory."""
        with self.track_execution(
            "import_directory", triggered_by="cli", input_params={"data_dir": str(data_dir)}
        ):
            teams = self.load_file(data_dir / "teams.json")
            users = self.load_file(data_dir / "users.json")
            reports = self.load_file(data_dir / "reports.json")
            return self.import_records(teams=teams, users=users, reports=reports)

    def import_records(
        self,
        teams: list[dict[str, Any]],
        users: list[dict[str, Any]],
        reports: list[dict[str, Any]],
    ) -> ImportResult:
        """Import parsed records; teams first so memberships resolve."""
        result = ImportResult()
        self.registry.ensure_synced(self.db)

        for record in teams:
            result.count("teams", self.team_repo.restore(self._build_team(record)))

        for record in users:
            result.count("users", self.user_repo.restore(self._build_user(record)))

        for record in reports:
            user_id = int(record["userId"])
            if self.user_repo.get_by_telegram_id(user_id) is None:
                self.identity_service.resolve(user_id)
                result.placeholders += 1
            result.count("reports", self.report_repo.restore(self._build_report(record)))

        logger.info(
            f"Legacy import finished: imported={result.imported} "
            f"skipped={result.skipped} placeholder_users={result.placeholders}"
        )
        return result

    def _template_id(self, value: Optional[str], owner: str) -> Optional[str]:
        if not value:
            return None
        template = self.registry.get_template(value)
        if template is None:
            logger.warning(f"{owner} references unknown template {value}; dropping it")
            return None
        return template.id

    def _build_team(self, record: dict[str, Any]) -> Team:
        team = Team(
            id=str(record["id"]),
            name=record.get("name") or str(record["id"]),
            description=record.get("description") or "",
            template_id=self._template_id(
                record.get("templateId"), f"Team {record['id']}"
            ),
            created_by=int(record.get("createdBy") or 0),
        )
        if record.get("createdAt"):
            team.created_at = record["createdAt"]
        return team

    def _build_user(self, record: dict[str, Any]) -> User:
        telegram_id = int(record["telegramId"])
        team_id = record.get("teamId") or None
        if team_id and self.team_repo.get_by_id(team_id) is None:
            logger.warning(f"User {telegram_id} references missing team {team_id}")
            team_id = None

        role = record.get("role") or ROLE_EMPLOYEE
        if self.identity_service.is_allow_listed(telegram_id):
            role = ROLE_ADMIN

        user = User(
            telegram_id=telegram_id,
            first_name=record.get("firstName") or PLACEHOLDER_FIRST_NAME,
            last_name=record.get("lastName") or None,
            username=record.get("username") or None,
            photo_url=record.get("photoUrl") or None,
            team_id=team_id,
            role=role,
        )
        if record.get("createdAt"):
            user.created_at = record["createdAt"]
        return user

    def _build_report(self, record: dict[str, Any]) -> Report:
        answers = record.get("answers")
        if answers is None:
            answers = record.get("templateData")

        template_id = self._template_id(record.get("templateId"), f"Report {record['id']}")
        priority = record.get("priority")
        status = record.get("status")
        if template_id is None:
            priority = priority or DEFAULT_REPORT_PRIORITY
            status = status or DEFAULT_REPORT_STATUS

        report = Report(
            id=str(record["id"]),
            user_id=int(record["userId"]),
            team_id=str(record["teamId"]),
            template_id=template_id,
            title=record.get("title") or "Untitled report",
            answers=answers,
            description=record.get("description"),
            priority=priority,
            status=status,
            category=record.get("category"),
        )
        if record.get("createdAt"):
            report.created_at = record["createdAt"]
        updated_at = record.get("updatedAt") or record.get("createdAt")
        if updated_at:
            report.updated_at = updated_at
        return report
