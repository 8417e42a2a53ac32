"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Load test environment variables before importing any application code
load_dotenv(".env.test", override=True)
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "test-bot-token")
os.environ.setdefault("TELEGRAM_ADMIN_IDS", "99")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PUBLIC_APP_URL", "https://reports.example.com")
os.environ.setdefault("LOG_DIR", "")

from src.config.database import Base, init_db  # noqa: E402
from src.services.core.template_registry import TemplateRegistry  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no external services")


@pytest.fixture
def test_engine():
    """Fresh in-memory SQLite database with all tables, per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    init_db(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def test_db(test_engine):
    """Database session bound to the per-test engine."""
    TestSessionLocal = sessionmaker(bind=test_engine, autoflush=False)
    session = TestSessionLocal()
    yield session
    session.close()


@pytest.fixture
def registry():
    """Template registry with a fresh sync memo."""
    return TemplateRegistry()


@pytest.fixture
def synced_registry(registry, test_db):
    """Registry whose catalog is already stored in test_db."""
    registry.ensure_synced(test_db)
    return registry


@pytest.fixture
def mock_sheets_service():
    """Configured Google Sheets service double."""
    service = MagicMock()
    service.is_configured = True
    service.sync_report_async = AsyncMock(
        return_value={"sheet": "Team_Ops", "columns": 9, "columns_added": 0}
    )
    return service


@pytest.fixture
def client(test_db, registry, mock_sheets_service):
    """TestClient wired to the per-test database and service doubles."""
    from fastapi.testclient import TestClient

    from src.api.app import app
    from src.api.dependencies import get_db, get_sheets_service, get_template_registry

    def _get_test_db():
        yield test_db

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_template_registry] = lambda: registry
    app.dependency_overrides[get_sheets_service] = lambda: mock_sheets_service

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()
