"""Shared helpers for API routes."""

from contextlib import contextmanager

from fastapi import HTTPException

from src.exceptions import (
    ConstraintViolationError,
    DuplicateKeyError,
    InvalidTemplateError,
    NotFoundError,
    ReportValidationError,
)
from src.utils.webapp_auth import validate_init_data


def validation_detail(errors: dict[str, str], message: str = "Validation failed") -> dict:
    """Body of a 400 carrying per-field messages."""
    return {"error": message, "errors": errors}


@contextmanager
def store_error_handler():
    """Convert domain exceptions to HTTP responses.

    Anything not listed propagates to the app-wide 500 handler.
    """
    try:
        yield
    except ReportValidationError as e:
        raise HTTPException(status_code=400, detail=validation_detail(e.errors))
    except InvalidTemplateError:
        raise HTTPException(status_code=400, detail="Invalid template ID")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ConstraintViolationError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _validate_request(init_data: str) -> dict:
    """Validate Telegram initData, raising 401 on failure."""
    try:
        return validate_init_data(init_data)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))
