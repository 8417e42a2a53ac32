"""Report validation exceptions."""

from typing import Optional

from src.exceptions.base import TeamReportsError


class ReportValidationError(TeamReportsError):
    """Submitted report data failed field or shape rules.

    Carries every violation found, keyed by field id, so the form can
    render all inline errors in one round trip.
    """

    def __init__(
        self,
        errors: dict[str, str],
        message: str = "Validation failed",
    ):
        super().__init__(message)
        self.errors = dict(errors)

    def __str__(self) -> str:
        base = super().__str__()
        if self.errors:
            fields = ", ".join(sorted(self.errors))
            return f"{base} ({fields})"
        return base


class InvalidTemplateError(TeamReportsError):
    """An explicitly requested template id is not in the catalog."""

    def __init__(self, template_id: Optional[str] = None):
        super().__init__(f"Invalid template ID: {template_id}")
        self.template_id = template_id
