"""Tests for the exception hierarchy."""

import pytest

from src.exceptions import (
    ConstraintViolationError,
    DuplicateKeyError,
    GoogleSheetsAuthError,
    GoogleSheetsError,
    GoogleSheetsNotConfiguredError,
    GoogleSheetsRateLimitError,
    InvalidTemplateError,
    NotFoundError,
    ReportValidationError,
    StoreError,
    TeamReportsError,
    TelegramDeliveryError,
)


@pytest.mark.unit
class TestTeamReportsError:
    """Tests for the TeamReportsError base exception."""

    def test_inherits_from_exception(self):
        assert issubclass(TeamReportsError, Exception)

    def test_message_stored(self):
        err = TeamReportsError("my message")
        assert str(err) == "my message"
        assert err.args == ("my message",)

    @pytest.mark.parametrize(
        "exc_class",
        [
            StoreError,
            NotFoundError,
            DuplicateKeyError,
            ConstraintViolationError,
            ReportValidationError,
            InvalidTemplateError,
            GoogleSheetsError,
            TelegramDeliveryError,
        ],
    )
    def test_all_errors_share_the_base(self, exc_class):
        assert issubclass(exc_class, TeamReportsError)


@pytest.mark.unit
class TestStoreErrors:
    def test_not_found_carries_entity_and_key(self):
        err = NotFoundError("Team not found: team_x", entity="team", key="team_x")

        assert isinstance(err, StoreError)
        assert err.entity == "team"
        assert err.key == "team_x"

    def test_duplicate_key_default_message(self):
        assert str(DuplicateKeyError()) == "Entity already exists"

    def test_constraint_violation_field(self):
        err = ConstraintViolationError("Team not found", entity="user", field="team_id")
        assert err.field == "team_id"


@pytest.mark.unit
class TestValidationErrors:
    def test_report_validation_error_lists_fields(self):
        err = ReportValidationError({"title": "Title is required", "date": "bad"})

        assert err.errors == {"title": "Title is required", "date": "bad"}
        assert str(err) == "Validation failed (date, title)"

    def test_report_validation_error_copies_errors(self):
        errors = {"title": "Title is required"}
        err = ReportValidationError(errors)
        errors.clear()

        assert err.errors == {"title": "Title is required"}

    def test_invalid_template_error(self):
        err = InvalidTemplateError("nope")

        assert err.template_id == "nope"
        assert str(err) == "Invalid template ID: nope"


@pytest.mark.unit
class TestGoogleSheetsErrors:
    def test_status_code_in_message(self):
        assert str(GoogleSheetsError("API error", status_code=500)) == "API error (status: 500)"

    def test_subclasses(self):
        assert issubclass(GoogleSheetsAuthError, GoogleSheetsError)
        assert issubclass(GoogleSheetsNotConfiguredError, GoogleSheetsError)

    def test_rate_limit_retry_after(self):
        err = GoogleSheetsRateLimitError(retry_after_seconds=60, status_code=429)

        assert err.retry_after_seconds == 60
        assert err.status_code == 429
