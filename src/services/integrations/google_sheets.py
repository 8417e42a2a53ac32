"""Google Sheets integration - best-effort mirror of submitted reports."""

import asyncio
import json
import re
from pathlib import Path
from typing import Any, Optional

from google.oauth2.service_account import Credentials as ServiceAccountCredentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from src.config.settings import settings
from src.exceptions import (
    GoogleSheetsAuthError,
    GoogleSheetsError,
    GoogleSheetsNotConfiguredError,
    GoogleSheetsRateLimitError,
)
from src.models.report import Report
from src.models.team import Team
from src.models.user import User
from src.repositories.sheet_columns_repository import SheetColumnsRepository
from src.services.base_service import BaseService
from src.services.core.template_registry import ReportTemplate
from src.utils.logger import logger


class GoogleSheetsService(BaseService):
    """Appends one row per created report to a per-template (or per-team) tab.

    Authenticates with a service account; the spreadsheet must be shared
    with the service account email.

    Each tab's header row is an append-only column set persisted in the
    sheet_columns table. New answer fields add columns to the right; old
    columns are never removed, and rows leave absent values blank.

    Not idempotent: syncing the same report twice appends two rows.
    """

    SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

    BASE_COLUMNS = ["Submission ID", "Timestamp", "Team", "User"]
    LEGACY_COLUMNS = [
        ("title", "Title"),
        ("description", "Description"),
        ("priority", "Priority"),
        ("category", "Category"),
        ("status", "Status"),
    ]

    NEW_SHEET_ROWS = 1000
    NEW_SHEET_COLUMNS = 26

    def __init__(
        self,
        spreadsheet_id: Optional[str] = None,
        service_account_info: Optional[dict] = None,
        timeout_seconds: Optional[float] = None,
    ):
        super().__init__()
        self.spreadsheet_id = spreadsheet_id or settings.GOOGLE_SHEETS_ID
        self._service_account_info = service_account_info
        self.timeout_seconds = timeout_seconds or settings.GOOGLE_SHEETS_TIMEOUT_SECONDS
        self._service = None

    @property
    def is_configured(self) -> bool:
        """True when a spreadsheet ID and credentials are available."""
        if not self.spreadsheet_id:
            return False
        return self._service_account_info is not None or bool(
            settings.GOOGLE_SERVICE_ACCOUNT_JSON or settings.GOOGLE_SERVICE_ACCOUNT_FILE
        )

    @property
    def service(self):
        """Lazy-initialize the Google Sheets API service."""
        if self._service is None:
            if not self.is_configured:
                raise GoogleSheetsNotConfiguredError()
            credentials = ServiceAccountCredentials.from_service_account_info(
                self._load_service_account_info(), scopes=self.SCOPES
            )
            self._service = build(
                "sheets", "v4", credentials=credentials, cache_discovery=False
            )
        return self._service

    # ==================== Naming & URLs ====================

    @staticmethod
    def sanitize_name(name: str) -> str:
        """Replace every non-alphanumeric character with an underscore."""
        return re.sub(r"[^a-zA-Z0-9]", "_", name)

    def sheet_title_for(
        self, team: Optional[Team], template: Optional[ReportTemplate]
    ) -> str:
        """Destination tab: one per template, or one per team for legacy reports."""
        if template is not None:
            return f"Template_{self.sanitize_name(template.name)}"
        if team is not None:
            return f"Team_{self.sanitize_name(team.name)}"
        raise ValueError("Either a team or a template is required")

    def get_sheet_url(self, sheet_title: Optional[str] = None) -> str:
        """Browser URL of the spreadsheet (or one tab), '#' when not configured."""
        if not self.spreadsheet_id:
            return "#"
        base_url = f"https://docs.google.com/spreadsheets/d/{self.spreadsheet_id}"
        if sheet_title:
            return f"{base_url}/edit#gid=0&range={sheet_title}"
        return f"{base_url}/edit"

    def get_spreadsheet_info(self) -> dict:
        """Spreadsheet title and tabs with direct links.

        Raises:
            GoogleSheetsNotConfiguredError: If credentials are missing
            GoogleSheetsError: On API failure
        """
        try:
            spreadsheet = (
                self.service.spreadsheets()
                .get(spreadsheetId=self.spreadsheet_id, fields="properties.title,sheets.properties")
                .execute()
            )
        except HttpError as e:
            self._handle_http_error(e, context="get_spreadsheet_info")

        base_url = self.get_sheet_url()
        return {
            "spreadsheetId": self.spreadsheet_id,
            "title": spreadsheet.get("properties", {}).get("title", "Reports Spreadsheet"),
            "sheets": [
                {
                    "title": sheet["properties"]["title"],
                    "sheetId": sheet["properties"]["sheetId"],
                    "url": f"{base_url}#gid={sheet['properties']['sheetId']}",
                }
                for sheet in spreadsheet.get("sheets", [])
            ],
        }

    # ==================== Row Building ====================

    def build_row_values(
        self,
        report: Report,
        team: Optional[Team],
        user: Optional[User],
        template: Optional[ReportTemplate],
    ) -> dict[str, Any]:
        """Column name -> cell value for one report, in column order."""
        values: dict[str, Any] = {
            "Submission ID": report.id,
            "Timestamp": report.created_at.isoformat() if report.created_at else "",
            "Team": team.name if team else report.team_id,
            "User": user.display_name if user else str(report.user_id),
        }

        if template is None:
            for attr, column in self.LEGACY_COLUMNS:
                values[column] = getattr(report, attr)
            return {k: self._cell(v) for k, v in values.items()}

        answers = report.answers or {}
        for template_field in template.fields:
            values.setdefault(
                template_field.display_label, answers.get(template_field.id)
            )
        # Answers outside the template still get a column, named by their key
        for key, value in answers.items():
            if template.get_field(key) is None:
                values.setdefault(key, value)

        return {k: self._cell(v) for k, v in values.items()}

    @staticmethod
    def _cell(value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float, str, bool)):
            return value
        return str(value)

    # ==================== Sync ====================

    def sync_report(
        self,
        report: Report,
        team: Optional[Team],
        user: Optional[User],
        template: Optional[ReportTemplate],
        db: Optional[Session] = None,
    ) -> dict:
        """
        Append a report to its destination tab, growing the header if needed.

        Call at most once per report. Runs on the caller's thread; async
        callers use sync_report_async instead.

        Returns:
            dict with sheet title, column count and number of columns added

        Raises:
            GoogleSheetsNotConfiguredError: If credentials are missing
            GoogleSheetsError: On API failure
        """
        if not self.is_configured:
            raise GoogleSheetsNotConfiguredError()

        return self._write_report_row(
            report.id,
            self.sheet_title_for(team, template),
            self.build_row_values(report, team, user, template),
            db,
        )

    async def sync_report_async(
        self,
        report: Report,
        team: Optional[Team],
        user: Optional[User],
        template: Optional[ReportTemplate],
        bind: Optional[Engine] = None,
    ) -> dict:
        """Sync a report from a worker thread with a bounded timeout.

        The row is built here, on the caller's thread, so the worker never
        touches the caller's ORM objects or session. The worker keeps the
        column set in its own session on ``bind`` (the process-wide engine
        if None) and closes it when done, even after a timeout.

        Raises:
            GoogleSheetsNotConfiguredError: If credentials are missing
            GoogleSheetsError: On timeout or API failure
        """
        if not self.is_configured:
            raise GoogleSheetsNotConfiguredError()

        sheet_title = self.sheet_title_for(team, template)
        row_values = self.build_row_values(report, team, user, template)
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(
                    self._sync_in_worker, report.id, sheet_title, row_values, bind
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise GoogleSheetsError(
                f"Google Sheets sync timed out after {self.timeout_seconds}s"
            )

    def _sync_in_worker(
        self,
        report_id: str,
        sheet_title: str,
        row_values: dict[str, Any],
        bind: Optional[Engine],
    ) -> dict:
        session = Session(bind=bind) if bind is not None else None
        try:
            return self._write_report_row(report_id, sheet_title, row_values, session)
        finally:
            if session is not None:
                session.close()

    def _write_report_row(
        self,
        report_id: str,
        sheet_title: str,
        row_values: dict[str, Any],
        db: Optional[Session],
    ) -> dict:
        with self.track_execution(
            "sync_report", input_params={"report_id": report_id, "sheet": sheet_title}
        ):
            with SheetColumnsRepository(db) as columns_repo:
                known_columns = columns_repo.get_columns(sheet_title)
                columns = known_columns + [
                    name for name in row_values if name not in known_columns
                ]
                added = len(columns) - len(known_columns)

                sheet_created = self._ensure_sheet(sheet_title)
                if added or sheet_created:
                    self._write_header(sheet_title, columns)
                if added:
                    columns_repo.extend_columns(sheet_title, columns)

            self._append_row(
                sheet_title, [row_values.get(column, "") for column in columns]
            )

            logger.info(
                f"Synced report {report_id} to sheet '{sheet_title}' "
                f"({len(columns)} columns, {added} new)"
            )
            return {
                "sheet": sheet_title,
                "columns": len(columns),
                "columns_added": added,
            }

    # ==================== Private Helpers ====================

    def _load_service_account_info(self) -> dict:
        if self._service_account_info is not None:
            return self._service_account_info

        try:
            if settings.GOOGLE_SERVICE_ACCOUNT_JSON:
                info = json.loads(settings.GOOGLE_SERVICE_ACCOUNT_JSON)
            else:
                info = json.loads(
                    Path(settings.GOOGLE_SERVICE_ACCOUNT_FILE).read_text(encoding="utf-8")
                )
        except (OSError, json.JSONDecodeError) as e:
            raise GoogleSheetsAuthError(f"Failed to load service account credentials: {e}")

        if info.get("type") != "service_account":
            raise GoogleSheetsAuthError(
                f"Unsupported credential type: '{info.get('type')}'. "
                f"Expected 'service_account'."
            )
        self._service_account_info = info
        return info

    def _ensure_sheet(self, sheet_title: str) -> bool:
        """Create the tab if missing. Returns True if it was created."""
        try:
            spreadsheet = (
                self.service.spreadsheets()
                .get(spreadsheetId=self.spreadsheet_id, fields="sheets.properties.title")
                .execute()
            )
            titles = {
                sheet["properties"]["title"] for sheet in spreadsheet.get("sheets", [])
            }
            if sheet_title in titles:
                return False

            self.service.spreadsheets().batchUpdate(
                spreadsheetId=self.spreadsheet_id,
                body={
                    "requests": [
                        {
                            "addSheet": {
                                "properties": {
                                    "title": sheet_title,
                                    "gridProperties": {
                                        "rowCount": self.NEW_SHEET_ROWS,
                                        "columnCount": self.NEW_SHEET_COLUMNS,
                                    },
                                }
                            }
                        }
                    ]
                },
            ).execute()
        except HttpError as e:
            self._handle_http_error(e, context=f"ensure_sheet({sheet_title})")

        logger.info(f"Created Google Sheets tab '{sheet_title}'")
        return True

    def _write_header(self, sheet_title: str, columns: list[str]):
        try:
            self.service.spreadsheets().values().update(
                spreadsheetId=self.spreadsheet_id,
                range=f"'{sheet_title}'!A1",
                valueInputOption="RAW",
                body={"values": [columns]},
            ).execute()
        except HttpError as e:
            self._handle_http_error(e, context=f"write_header({sheet_title})")

    def _append_row(self, sheet_title: str, row: list[Any]):
        try:
            self.service.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=f"'{sheet_title}'!A1",
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body={"values": [row]},
            ).execute()
        except HttpError as e:
            self._handle_http_error(e, context=f"append_row({sheet_title})")

    def _handle_http_error(self, error: HttpError, context: str = "") -> None:
        """Convert Google HttpError to application exception."""
        status = error.resp.status
        reason = str(error)

        if status in (401, 403):
            logger.error(f"Google Sheets auth error in {context}: {reason}")
            raise GoogleSheetsAuthError(
                f"Authentication failed: {reason}", status_code=status
            )
        elif status == 429:
            logger.warning(f"Google Sheets rate limit in {context}: {reason}")
            raise GoogleSheetsRateLimitError(
                f"Rate limit exceeded: {reason}",
                status_code=status,
                retry_after_seconds=60,
            )
        else:
            logger.error(f"Google Sheets API error ({status}) in {context}: {reason}")
            raise GoogleSheetsError(f"API error: {reason}", status_code=status)
