"""Tests for the legacy JSON import."""

import json
from datetime import datetime

import pytest

from src.repositories.report_repository import ReportRepository
from src.repositories.team_repository import TeamRepository
from src.repositories.user_repository import UserRepository
from src.services.core.legacy_import import (
    LegacyImportService,
    parse_timestamp,
    revive_dates,
)

TEAMS = [
    {
        "id": "team_1700000000000_abc123def",
        "name": "Ops",
        "description": "Operations",
        "templateId": "general",
        "createdBy": 99,
        "createdAt": "2024-01-10T08:00:00.000Z",
    }
]

USERS = [
    {
        "telegramId": 1,
        "firstName": "Ann",
        "username": "ann",
        "teamId": "team_1700000000000_abc123def",
        "role": "employee",
        "createdAt": "2024-01-10T09:00:00.000Z",
    },
    {"telegramId": 99, "firstName": "Boss", "role": "employee"},
    {"telegramId": 2, "firstName": "Gone", "teamId": "team_deleted"},
]

REPORTS = [
    {
        "id": "report_1700000000000_xyz987uvw",
        "userId": 1,
        "teamId": "team_1700000000000_abc123def",
        "title": "Printer",
        "description": "Jammed",
        "category": "Hardware",
        "createdAt": "2024-01-11T10:30:00.000Z",
        "updatedAt": "2024-01-12T10:30:00.000Z",
    },
    {
        "id": "report_1700000000001_tpl",
        "userId": 5,
        "teamId": "team_1700000000000_abc123def",
        "templateId": "general_report_template",
        "title": "Weekly",
        "templateData": {"title": "Weekly", "description": "ok", "date": "2024-01-12"},
        "createdAt": "2024-01-12T10:30:00.000Z",
    },
]


@pytest.fixture
def import_service(test_db, registry):
    return LegacyImportService(test_db, registry=registry)


@pytest.mark.unit
class TestDateRevival:
    def test_parse_timestamp_normalizes_to_naive_utc(self):
        assert parse_timestamp("2024-01-11T12:30:00+02:00") == datetime(2024, 1, 11, 10, 30)

    @pytest.mark.parametrize("value", [None, "", "yesterday", 12])
    def test_parse_timestamp_rejects(self, value):
        assert parse_timestamp(value) is None

    def test_revive_dates_by_key_suffix(self):
        record = revive_dates(
            {"createdAt": "2024-01-11T10:30:00Z", "dueDate": "2024-02-01", "title": "2024-01-01"}
        )

        assert record["createdAt"] == datetime(2024, 1, 11, 10, 30)
        assert record["dueDate"] == datetime(2024, 2, 1)
        assert record["title"] == "2024-01-01"


@pytest.mark.unit
class TestImportRecords:
    def test_imports_everything_keeping_ids(self, import_service, test_db):
        result = import_service.import_records(teams=TEAMS, users=USERS, reports=REPORTS)

        assert result.imported == {"teams": 1, "users": 3, "reports": 2}
        assert result.placeholders == 1

        team = TeamRepository(test_db).get_by_id("team_1700000000000_abc123def")
        assert team.template_id == "general_report_template"
        assert team.created_by == 99

        legacy = ReportRepository(test_db).get_by_id("report_1700000000000_xyz987uvw")
        assert legacy.priority == "medium"
        assert legacy.status == "pending"
        assert legacy.created_at == datetime(2024, 1, 11, 10, 30)
        assert legacy.updated_at == datetime(2024, 1, 12, 10, 30)

        templated = ReportRepository(test_db).get_by_id("report_1700000000001_tpl")
        assert templated.answers == {"title": "Weekly", "description": "ok", "date": "2024-01-12"}
        assert templated.priority is None

    def test_user_fixups(self, import_service, test_db):
        import_service.import_records(teams=TEAMS, users=USERS, reports=[])
        user_repo = UserRepository(test_db)

        assert user_repo.get_by_telegram_id(99).role == "admin"
        assert user_repo.get_by_telegram_id(2).team_id is None
        assert user_repo.get_by_telegram_id(1).created_at == datetime(2024, 1, 10, 9, 0)

    def test_placeholder_user_for_unknown_submitter(self, import_service, test_db):
        import_service.import_records(teams=TEAMS, users=[], reports=REPORTS[1:])

        placeholder = UserRepository(test_db).get_by_telegram_id(5)
        assert placeholder.first_name == "User"
        assert placeholder.role == "employee"

    def test_rerun_skips_existing_rows(self, import_service):
        import_service.import_records(teams=TEAMS, users=USERS, reports=REPORTS)

        result = import_service.import_records(teams=TEAMS, users=USERS, reports=REPORTS)

        assert result.imported == {"teams": 0, "users": 0, "reports": 0}
        assert result.skipped == {"teams": 1, "users": 3, "reports": 2}
        assert result.placeholders == 0

    def test_unknown_template_is_dropped(self, import_service, test_db):
        teams = [dict(TEAMS[0], templateId="retired")]

        import_service.import_records(teams=teams, users=[], reports=[])

        team = TeamRepository(test_db).get_by_id("team_1700000000000_abc123def")
        assert team.template_id is None


@pytest.mark.unit
class TestImportDirectory:
    def test_reads_json_files(self, import_service, tmp_path):
        (tmp_path / "teams.json").write_text(json.dumps(TEAMS), encoding="utf-8")
        (tmp_path / "users.json").write_text(json.dumps(USERS[:1]), encoding="utf-8")

        result = import_service.import_directory(tmp_path)

        assert result.imported == {"teams": 1, "users": 1, "reports": 0}

    def test_non_array_file_rejected(self, import_service, tmp_path):
        (tmp_path / "teams.json").write_text('{"id": "x"}', encoding="utf-8")

        with pytest.raises(ValueError, match="JSON array"):
            import_service.import_directory(tmp_path)

    def test_missing_file_is_empty(self, tmp_path):
        assert LegacyImportService.load_file(tmp_path / "users.json") == []
