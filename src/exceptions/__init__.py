"""Team Reports exception classes."""

from src.exceptions.base import TeamReportsError
from src.exceptions.store import (
    StoreError,
    NotFoundError,
    DuplicateKeyError,
    ConstraintViolationError,
)
from src.exceptions.validation import ReportValidationError, InvalidTemplateError
from src.exceptions.google_sheets import (
    GoogleSheetsError,
    GoogleSheetsAuthError,
    GoogleSheetsRateLimitError,
    GoogleSheetsNotConfiguredError,
)
from src.exceptions.telegram import TelegramDeliveryError

__all__ = [
    "TeamReportsError",
    "StoreError",
    "NotFoundError",
    "DuplicateKeyError",
    "ConstraintViolationError",
    "ReportValidationError",
    "InvalidTemplateError",
    "GoogleSheetsError",
    "GoogleSheetsAuthError",
    "GoogleSheetsRateLimitError",
    "GoogleSheetsNotConfiguredError",
    "TelegramDeliveryError",
]
