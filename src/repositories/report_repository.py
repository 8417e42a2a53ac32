"""Report repository - CRUD operations for reports."""

from typing import Any, Optional
from datetime import datetime

from sqlalchemy import func

from src.exceptions import ConstraintViolationError
from src.repositories.base_repository import BaseRepository
from src.models.report import Report
from src.models.team import Team
from src.models.template import Template
from src.models.user import User


class ReportRepository(BaseRepository):
    """Repository for Report CRUD operations."""

    UPDATABLE_FIELDS = {
        "title",
        "description",
        "answers",
        "priority",
        "status",
        "category",
    }

    def get_by_id(self, report_id: str) -> Optional[Report]:
        """Get report by ID."""
        result = self.db.get(Report, report_id)
        self.end_read_transaction()
        return result

    def get_all(
        self,
        user_id: Optional[int] = None,
        team_id: Optional[str] = None,
    ) -> list[Report]:
        """Get reports, most recent first, optionally filtered."""
        query = self.db.query(Report)

        if user_id is not None:
            query = query.filter(Report.user_id == user_id)
        if team_id is not None:
            query = query.filter(Report.team_id == team_id)

        result = query.order_by(Report.created_at.desc()).all()
        self.end_read_transaction()
        return result

    def create(
        self,
        user_id: int,
        team_id: str,
        title: str,
        template_id: Optional[str] = None,
        answers: Optional[dict[str, Any]] = None,
        description: Optional[str] = None,
        priority: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Report:
        """Create a new report.

        Raises:
            ConstraintViolationError: If the user, team or template is missing
        """
        if self.db.get(User, user_id) is None:
            raise ConstraintViolationError(
                f"User not found: {user_id}", entity="report", field="user_id"
            )
        if self.db.get(Team, team_id) is None:
            raise ConstraintViolationError(
                f"Team not found: {team_id}", entity="report", field="team_id"
            )
        if template_id is not None and self.db.get(Template, template_id) is None:
            raise ConstraintViolationError(
                f"Template not found: {template_id}",
                entity="report",
                field="template_id",
            )

        now = datetime.utcnow()
        report = Report(
            user_id=user_id,
            team_id=team_id,
            template_id=template_id,
            title=title,
            answers=dict(answers) if answers is not None else None,
            description=description,
            priority=priority,
            status=status,
            category=category,
            created_at=now,
            updated_at=now,
        )
        self.db.add(report)
        self.commit()
        self.db.refresh(report)
        return report

    def update(self, report_id: str, **fields) -> Optional[Report]:
        """Patch a report. Returns None if the report does not exist.

        Identity and ownership columns are never changed.
        """
        report = self.db.get(Report, report_id)
        if report is None:
            self.end_read_transaction()
            return None

        for name, value in fields.items():
            if name not in self.UPDATABLE_FIELDS:
                continue
            if name == "answers" and value is not None:
                value = dict(value)
            setattr(report, name, value)

        report.updated_at = datetime.utcnow()
        self.commit()
        self.db.refresh(report)
        return report

    def count_by_team(self) -> dict[str, int]:
        """Report counts keyed by team ID."""
        rows = (
            self.db.query(Report.team_id, func.count(Report.id))
            .group_by(Report.team_id)
            .all()
        )
        self.end_read_transaction()
        return {team_id: count for team_id, count in rows}
