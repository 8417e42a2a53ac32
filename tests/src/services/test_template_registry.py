"""Tests for the report template catalog and its database sync."""

from unittest.mock import patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.config.database import init_db
from src.config.report_templates import REPORT_TEMPLATES
from src.repositories.template_repository import TemplateRepository
from src.services.core.template_registry import (
    ReportTemplate,
    TemplateField,
    TemplateRegistry,
)


@pytest.mark.unit
class TestTemplateCatalog:
    """Lookups against the built-in catalog."""

    def test_lists_catalog_in_order(self, registry):
        ids = [t.id for t in registry.list_templates()]
        assert ids == [t["id"] for t in REPORT_TEMPLATES]

    @pytest.mark.parametrize(
        "lookup, expected_id",
        [
            ("general_report_template", "general_report_template"),
            ("general", "general_report_template"),
            ("student_activity", "student_activity_template"),
            ("youth_work", "youth_work_department_template"),
        ],
    )
    def test_get_template_by_id_or_key(self, registry, lookup, expected_id):
        assert registry.get_template(lookup).id == expected_id

    @pytest.mark.parametrize("lookup", ["nope", "", None])
    def test_get_unknown_template_returns_none(self, registry, lookup):
        assert registry.get_template(lookup) is None

    def test_student_count_fields_have_min_zero(self, registry):
        template = registry.get_template("student_activity")
        number_fields = [f for f in template.fields if f.type == "number"]

        assert len(number_fields) == 8
        assert all(f.min == 0 and f.required for f in number_fields)

    def test_general_priority_is_optional_select(self, registry):
        priority = registry.get_template("general").get_field("priority")

        assert priority.type == "select"
        assert priority.required is False
        assert priority.options == ("low", "medium", "high")


@pytest.mark.unit
class TestTemplateDataclasses:
    """ReportTemplate / TemplateField construction rules."""

    def test_duplicate_field_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate field id"):
            ReportTemplate(
                id="t",
                name="T",
                fields=(TemplateField(id="a", label="A"), TemplateField(id="a", label="A2")),
            )

    def test_unknown_field_type_rejected(self):
        with pytest.raises(ValueError, match="Unknown field type"):
            TemplateField.from_dict({"id": "a", "label": "A", "type": "checkbox"})

    def test_display_label_strips_required_marker(self):
        assert TemplateField(id="a", label="Report Title*").display_label == "Report Title"

    def test_dict_round_trip_keeps_validation(self):
        data = {
            "id": "count",
            "label": "Count",
            "type": "number",
            "required": True,
            "validation": {"min": 0, "max": 10},
        }
        assert TemplateField.from_dict(data).to_dict() == data


@pytest.mark.unit
class TestEnsureSynced:
    """Catalog -> templates table."""

    def test_inserts_every_catalog_template(self, registry, test_db):
        inserted = registry.ensure_synced(test_db)

        assert inserted == len(REPORT_TEMPLATES)
        stored = TemplateRepository(test_db).get_all()
        assert {t.id for t in stored} == {t["id"] for t in REPORT_TEMPLATES}

    def test_is_idempotent(self, registry, test_db):
        """Row count is unchanged by a second (forced) sync."""
        template_repo = TemplateRepository(test_db)
        registry.ensure_synced(test_db)
        before = template_repo.count()

        inserted = registry.ensure_synced(test_db, force=True)

        assert inserted == 0
        assert template_repo.count() == before == len(REPORT_TEMPLATES)

    def test_memoized_per_bind(self, registry, test_db):
        registry.ensure_synced(test_db)

        with patch(
            "src.services.core.template_registry.TemplateRepository"
        ) as mock_repo_class:
            assert registry.ensure_synced(test_db) == 0

        mock_repo_class.assert_not_called()

    def test_new_engine_with_same_url_is_synced(self, registry, test_db):
        """The memo tracks engine objects, not URLs or recycled ids."""
        registry.ensure_synced(test_db)

        other_engine = create_engine("sqlite://", poolclass=StaticPool)
        init_db(other_engine)
        other_db = sessionmaker(bind=other_engine)()
        try:
            assert registry.ensure_synced(other_db) == len(REPORT_TEMPLATES)
        finally:
            other_db.close()
            other_engine.dispose()

    def test_fresh_registry_finds_rows_present(self, registry, test_db):
        registry.ensure_synced(test_db)

        assert TemplateRegistry().ensure_synced(test_db) == 0

    def test_stored_fields_match_catalog(self, registry, test_db):
        registry.ensure_synced(test_db)

        stored = TemplateRepository(test_db).get_by_id("general_report_template")

        assert stored.key == "general"
        assert [f["id"] for f in stored.fields] == ["title", "description", "date", "priority"]
