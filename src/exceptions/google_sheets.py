"""Google Sheets related exceptions."""

from typing import Optional

from src.exceptions.base import TeamReportsError


class GoogleSheetsError(TeamReportsError):
    """General Google Sheets API error."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_reason: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_reason = error_reason

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code:
            return f"{base} (status: {self.status_code})"
        return base


class GoogleSheetsAuthError(GoogleSheetsError):
    """Invalid service account credentials, or the spreadsheet is not
    shared with the service account email."""

    def __init__(
        self,
        message: str = "Google Sheets authentication failed",
        **kwargs,
    ):
        super().__init__(message, **kwargs)


class GoogleSheetsRateLimitError(GoogleSheetsError):
    """API quota exceeded."""

    def __init__(
        self,
        message: str = "Google Sheets API rate limit exceeded",
        retry_after_seconds: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.retry_after_seconds = retry_after_seconds


class GoogleSheetsNotConfiguredError(GoogleSheetsError):
    """GOOGLE_SHEETS_ID or service account credentials are missing."""

    def __init__(
        self,
        message: str = "Google Sheets credentials not configured",
        **kwargs,
    ):
        super().__init__(message, **kwargs)
