"""Report validation - template-driven and legacy field rules.

Validation never touches the store. Every violation is collected before
returning so the form can show all inline errors at once.
"""

import math
from datetime import date, datetime
from typing import Any, Mapping, Optional

from dateutil.parser import isoparse

from src.config.constants import REPORT_PRIORITIES, REPORT_STATUSES
from src.services.core.template_registry import ReportTemplate, TemplateField

LEGACY_REQUIRED_FIELDS = (
    ("title", "Title"),
    ("description", "Description"),
    ("category", "Category"),
)

TITLE_FIELD_IDS = ("title", "event_name")


def is_blank(value: Any) -> bool:
    """None, empty/whitespace-only strings and empty collections count as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def parse_number(value: Any) -> Optional[float]:
    """Parse a submitted number; None if it is not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def _is_date(value: Any) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(value, str):
        return False
    try:
        isoparse(value.strip())
    except (ValueError, OverflowError):
        return False
    return True


class ReportValidator:
    """Checks answer maps against templates, and legacy reports against the default shape."""

    def validate_answers(
        self, template: ReportTemplate, answers: Mapping[str, Any]
    ) -> dict[str, str]:
        """
        Validate an answer map against a template.

        Args:
            template: Resolved template
            answers: Field id -> submitted value

        Returns:
            Field id -> message for every violation (empty when valid)
        """
        errors: dict[str, str] = {}

        if not answers:
            errors["answers"] = "Answers are required"

        for template_field in template.fields:
            message = self._check_field(template_field, answers.get(template_field.id))
            if message:
                errors[template_field.id] = message

        return errors

    def _check_field(self, template_field: TemplateField, value: Any) -> Optional[str]:
        label = template_field.display_label

        if is_blank(value):
            if template_field.required:
                return f"{label} is required"
            return None

        if template_field.type == "number":
            number = parse_number(value)
            if number is None:
                return f"{label} must be a number"
            if template_field.min is not None and number < template_field.min:
                return f"{label} must be at least {_format_bound(template_field.min)}"
            if template_field.max is not None and number > template_field.max:
                return f"{label} must be at most {_format_bound(template_field.max)}"

        elif template_field.type == "date":
            if not _is_date(value):
                return f"{label} must be a valid date"

        elif template_field.type == "select" and template_field.options:
            if str(value) not in template_field.options:
                options = ", ".join(template_field.options)
                return f"{label} must be one of: {options}"

        return None

    def validate_legacy(self, data: Mapping[str, Any]) -> dict[str, str]:
        """
        Validate the default (template-less) report shape.

        title, description and category are required; priority and status,
        when given, must be known values.
        """
        errors: dict[str, str] = {}

        for field_id, label in LEGACY_REQUIRED_FIELDS:
            if is_blank(data.get(field_id)):
                errors[field_id] = f"{label} is required"

        errors.update(self._check_enums(data))
        return errors

    def validate_update(
        self,
        updates: Mapping[str, Any],
        template: Optional[ReportTemplate] = None,
        legacy: bool = False,
    ) -> dict[str, str]:
        """
        Validate a partial report update; only the keys present are checked.

        Patched answers replace the stored map, so they are checked as a
        complete answer set against the report's template.

        Args:
            updates: Field name -> new value
            template: Template of a template-driven report
            legacy: True for a report with no template
        """
        errors: dict[str, str] = {}

        required = LEGACY_REQUIRED_FIELDS if legacy else LEGACY_REQUIRED_FIELDS[:1]
        for field_id, label in required:
            if field_id in updates and is_blank(updates[field_id]):
                errors[field_id] = f"{label} is required"

        if "answers" in updates and not legacy:
            if template is not None:
                errors.update(self.validate_answers(template, updates["answers"] or {}))
            elif is_blank(updates["answers"]):
                errors["answers"] = "Answers are required"

        errors.update(self._check_enums(updates))
        return errors

    @staticmethod
    def _check_enums(data: Mapping[str, Any]) -> dict[str, str]:
        errors = {}
        priority = data.get("priority")
        if not is_blank(priority) and priority not in REPORT_PRIORITIES:
            errors["priority"] = f"Priority must be one of: {', '.join(REPORT_PRIORITIES)}"

        status = data.get("status")
        if not is_blank(status) and status not in REPORT_STATUSES:
            errors["status"] = f"Status must be one of: {', '.join(REPORT_STATUSES)}"
        return errors


def derive_title(
    template: ReportTemplate,
    answers: Mapping[str, Any],
    requested_title: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """Pick a display title for a template-driven report.

    Uses the answer to a "title" or "event_name" field, then the title sent
    with the request, then "<template name> - <date>".
    """
    for field_id in TITLE_FIELD_IDS:
        value = answers.get(field_id)
        if not is_blank(value):
            return str(value).strip()

    if not is_blank(requested_title):
        return requested_title.strip()

    today = today or datetime.utcnow().date()
    return f"{template.name} - {today.isoformat()}"
