"""Template registry - report template catalog and its durable copy."""

import weakref
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from src.config.constants import FIELD_TYPES
from src.config.database import get_engine
from src.config.report_templates import REPORT_TEMPLATES
from src.repositories.template_repository import TemplateRepository
from src.utils.logger import logger


@dataclass(frozen=True)
class TemplateField:
    """One form field of a report template.

    Attributes:
        id: Answer key in the submitted answer map
        label: Human-readable label (also the Google Sheets column name)
        type: One of text, textarea, number, date, select
        required: Whether a non-blank value must be supplied
        placeholder: Optional input placeholder
        options: Allowed values for select fields
        min: Lower bound for number fields
        max: Upper bound for number fields
    """

    id: str
    label: str
    type: str = "text"
    required: bool = False
    placeholder: Optional[str] = None
    options: tuple[str, ...] = ()
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def display_label(self) -> str:
        """Label without the trailing required-marker asterisk."""
        return self.label.rstrip("*").strip()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TemplateField":
        field_type = data.get("type", "text")
        if field_type not in FIELD_TYPES:
            raise ValueError(f"Unknown field type '{field_type}' for field {data.get('id')}")
        validation = data.get("validation") or {}
        return cls(
            id=data["id"],
            label=data.get("label", data["id"]),
            type=field_type,
            required=bool(data.get("required", False)),
            placeholder=data.get("placeholder"),
            options=tuple(data.get("options") or ()),
            min=validation.get("min"),
            max=validation.get("max"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "type": self.type,
            "required": self.required,
        }
        if self.placeholder is not None:
            data["placeholder"] = self.placeholder
        if self.options:
            data["options"] = list(self.options)
        validation = {
            k: v for k, v in (("min", self.min), ("max", self.max)) if v is not None
        }
        if validation:
            data["validation"] = validation
        return data


@dataclass(frozen=True)
class ReportTemplate:
    """A named, ordered list of form fields."""

    id: str
    name: str
    fields: tuple[TemplateField, ...]
    key: Optional[str] = None
    description: Optional[str] = None
    _by_id: dict = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        seen: set[str] = set()
        for f in self.fields:
            if f.id in seen:
                raise ValueError(f"Duplicate field id '{f.id}' in template {self.id}")
            seen.add(f.id)
            self._by_id[f.id] = f

    def get_field(self, field_id: str) -> Optional[TemplateField]:
        return self._by_id.get(field_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportTemplate":
        return cls(
            id=data["id"],
            key=data.get("key"),
            name=data["name"],
            description=data.get("description"),
            fields=tuple(TemplateField.from_dict(f) for f in data.get("fields", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "fields": [f.to_dict() for f in self.fields],
        }


class TemplateRegistry:
    """
    Fixed catalog of report templates.

    Lookups are served from memory. ensure_synced() makes sure every
    catalog entry also exists as a templates row, since Team.template_id
    and Report.template_id are foreign keys into that table.
    """

    def __init__(self, catalog: Optional[list[dict[str, Any]]] = None):
        definitions = REPORT_TEMPLATES if catalog is None else catalog
        self._templates = [ReportTemplate.from_dict(d) for d in definitions]
        self._by_id = {t.id: t for t in self._templates}
        self._by_key = {t.key: t for t in self._templates if t.key}
        self._synced_engines: "weakref.WeakSet[Engine]" = weakref.WeakSet()

    def get_template(self, id_or_key: Optional[str]) -> Optional[ReportTemplate]:
        """Look up a template by ID, then by its short key."""
        if not id_or_key:
            return None
        return self._by_id.get(id_or_key) or self._by_key.get(id_or_key)

    def list_templates(self) -> list[ReportTemplate]:
        """All catalog templates, in catalog order."""
        return list(self._templates)

    def ensure_synced(self, db: Optional[Session] = None, force: bool = False) -> int:
        """
        Insert catalog templates missing from the database.

        Memoized per database engine; pass force=True to re-check.

        Args:
            db: Session to use (a repository-owned session if None)
            force: Ignore the memo

        Returns:
            Number of rows inserted
        """
        engine = db.get_bind() if db is not None else get_engine()
        if not force and engine in self._synced_engines:
            return 0

        inserted = 0
        repo = TemplateRepository(db)
        try:
            for template in self._templates:
                created = repo.create_if_absent(
                    template_id=template.id,
                    key=template.key,
                    name=template.name,
                    description=template.description,
                    fields=[f.to_dict() for f in template.fields],
                )
                if created:
                    inserted += 1
                    logger.info(f"Seeded template {template.id}")
        finally:
            repo.close()

        self._synced_engines.add(engine)
        if inserted:
            logger.info(f"Template sync inserted {inserted} template(s)")
        return inserted


# Process-wide registry
template_registry = TemplateRegistry()
