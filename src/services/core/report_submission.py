"""Report submission service - validate, persist, then mirror to Google Sheets."""

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from src.config.constants import DEFAULT_REPORT_PRIORITY, DEFAULT_REPORT_STATUS
from src.exceptions import InvalidTemplateError, NotFoundError, ReportValidationError
from src.models.report import Report
from src.models.team import Team
from src.models.user import User
from src.repositories.report_repository import ReportRepository
from src.repositories.team_repository import TeamRepository
from src.services.base_service import BaseService
from src.services.core.identity_service import IdentityService
from src.services.core.report_validation import (
    ReportValidator,
    derive_title,
    is_blank,
)
from src.services.core.template_registry import (
    ReportTemplate,
    TemplateRegistry,
    template_registry,
)
from src.services.integrations.google_sheets import GoogleSheetsService
from src.utils.logger import logger


@dataclass
class SubmissionResult:
    """Outcome of a report submission.

    Attributes:
        report: The persisted report (always present on success)
        sheet_sync: Sync summary when the Google Sheets mirror succeeded
        warning: Soft warning when the mirror failed; the report still stands
    """

    report: Report
    sheet_sync: Optional[dict] = None
    warning: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"report": self.report.to_dict()}
        if self.warning:
            data["warning"] = self.warning
        return data


class ReportSubmissionService(BaseService):
    """
    Turns a raw submission into a persisted Report.

    Template resolution order: explicit template id, then the team's
    assigned template, then the legacy title/description/category shape.
    A team template that no longer exists in the catalog falls back to the
    legacy shape.
    """

    def __init__(
        self,
        db: Optional[Session] = None,
        registry: Optional[TemplateRegistry] = None,
        sheets_service: Optional[GoogleSheetsService] = None,
    ):
        super().__init__()
        self.db = db
        self.registry = registry or template_registry
        self.sheets_service = sheets_service
        self.report_repo = ReportRepository(db)
        self.team_repo = TeamRepository(db)
        self.identity_service = IdentityService(db)
        self.validator = ReportValidator()

    def resolve_template(
        self, team: Team, template_id: Optional[str] = None
    ) -> Optional[ReportTemplate]:
        """
        Pick the template a submission is validated against.

        Raises:
            InvalidTemplateError: If an explicit template_id is not in the catalog
        """
        if template_id:
            template = self.registry.get_template(template_id)
            if template is None:
                raise InvalidTemplateError(template_id)
            return template

        if team.template_id:
            template = self.registry.get_template(team.template_id)
            if template is None:
                logger.warning(
                    f"Team {team.id} references unknown template "
                    f"{team.template_id}; using the default report shape"
                )
            return template

        return None

    def validate(
        self,
        template: Optional[ReportTemplate],
        answers: Optional[dict[str, Any]],
        legacy_fields: dict[str, Any],
    ) -> dict[str, str]:
        """Field id -> message for every violation; empty when valid."""
        if template is not None:
            return self.validator.validate_answers(template, answers or {})

        has_legacy_fields = any(
            not is_blank(legacy_fields.get(name))
            for name in ("title", "description", "category")
        )
        if answers and not has_legacy_fields:
            return {"templateId": "No report template is assigned to this team"}

        return self.validator.validate_legacy(legacy_fields)

    async def submit(
        self,
        user_id: int,
        team_id: str,
        template_id: Optional[str] = None,
        title: Optional[str] = None,
        answers: Optional[dict[str, Any]] = None,
        description: Optional[str] = None,
        priority: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        sync_to_sheets: bool = True,
    ) -> SubmissionResult:
        """
        Validate and persist a report, then mirror it to Google Sheets.

        A Google Sheets failure never fails the submission; it comes back
        as SubmissionResult.warning.

        Raises:
            NotFoundError: If the team does not exist
            InvalidTemplateError: If an explicit template_id is unknown
            ReportValidationError: With every field violation found
        """
        report, team, user, template = self.create_report(
            user_id=user_id,
            team_id=team_id,
            template_id=template_id,
            title=title,
            answers=answers,
            description=description,
            priority=priority,
            status=status,
            category=category,
        )

        result = SubmissionResult(report=report)
        if sync_to_sheets:
            result.sheet_sync, result.warning = await self._mirror_to_sheets(
                report, team, user, template
            )
        return result

    def create_report(
        self,
        user_id: int,
        team_id: str,
        template_id: Optional[str] = None,
        title: Optional[str] = None,
        answers: Optional[dict[str, Any]] = None,
        description: Optional[str] = None,
        priority: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
    ) -> tuple[Report, Team, User, Optional[ReportTemplate]]:
        """Validate and persist a report without touching Google Sheets."""
        with self.track_execution(
            "create_report",
            user_id=user_id,
            triggered_by="user",
            input_params={"team_id": team_id, "template_id": template_id},
            expected_errors=(NotFoundError, InvalidTemplateError, ReportValidationError),
        ):
            self.registry.ensure_synced(self.db)

            team = self.team_repo.get_by_id(team_id)
            if team is None:
                raise NotFoundError(f"Team not found: {team_id}", entity="team", key=team_id)

            template = self.resolve_template(team, template_id)
            legacy_fields = {
                "title": title,
                "description": description,
                "category": category,
                "priority": priority,
                "status": status,
            }

            errors = self.validate(template, answers, legacy_fields)
            if errors:
                raise ReportValidationError(errors)

            # Submitter must exist; unseen identities are provisioned like a first /start
            user = self.identity_service.resolve(user_id).user

            if template is not None:
                report = self.report_repo.create(
                    user_id=user_id,
                    team_id=team.id,
                    template_id=template.id,
                    title=derive_title(template, answers, title),
                    answers=answers,
                )
            else:
                report = self.report_repo.create(
                    user_id=user_id,
                    team_id=team.id,
                    title=title.strip(),
                    description=description.strip(),
                    category=category.strip(),
                    priority=priority or DEFAULT_REPORT_PRIORITY,
                    status=status or DEFAULT_REPORT_STATUS,
                )

            logger.info(
                f"Report {report.id} created by {user_id} for team {team.id} "
                f"(template={report.template_id or 'legacy'})"
            )
            return report, team, user, template

    def update_report(self, report_id: str, **updates) -> Optional[Report]:
        """
        Patch a report. Returns None if it does not exist.

        Patched answers replace the stored ones and must form a complete,
        valid answer set for the report's template. A template-less report
        keeps its title, description and category non-blank.

        Raises:
            ReportValidationError: With every field violation found
        """
        report = self.report_repo.get_by_id(report_id)
        if report is None:
            return None

        template = None
        if report.template_id is not None:
            template = self.registry.get_template(report.template_id)
            if template is None:
                logger.warning(
                    f"Report {report_id} references unknown template "
                    f"{report.template_id}; answers are not checked field by field"
                )

        errors = self.validator.validate_update(
            updates, template=template, legacy=report.template_id is None
        )
        if errors:
            raise ReportValidationError(errors)

        if template is not None and "answers" in updates and "title" not in updates:
            updates["title"] = derive_title(template, updates["answers"], report.title)

        return self.report_repo.update(report_id, **updates)

    async def _mirror_to_sheets(
        self,
        report: Report,
        team: Team,
        user: User,
        template: Optional[ReportTemplate],
    ) -> tuple[Optional[dict], Optional[str]]:
        if self.sheets_service is None or not self.sheets_service.is_configured:
            logger.debug(f"Google Sheets not configured; skipping sync of {report.id}")
            return None, None

        try:
            bind = self.db.get_bind() if self.db is not None else None
            summary = await self.sheets_service.sync_report_async(
                report, team, user, template, bind
            )
            return summary, None
        except Exception as e:
            logger.error(
                f"Report {report.id} saved but Google Sheets sync failed: {e}",
                exc_info=True,
            )
            return None, f"Report saved, but syncing to Google Sheets failed: {e}"
