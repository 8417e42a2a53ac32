"""Database connection and session management."""

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from src.config.settings import settings

# Base class for models
Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        url = settings.database_url
        if url.startswith("sqlite"):
            _engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                echo=False,
            )
        else:
            _engine = create_engine(
                url,
                pool_pre_ping=True,  # Verify connections before using
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_recycle=300,  # Recycle connections after 5 minutes
                pool_timeout=30,
                echo=False,  # Set to True for SQL debugging
            )
    return _engine


def SessionLocal() -> Session:
    """Create a new session bound to the process-wide engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=get_engine()
        )
    return _session_factory()


def get_db() -> Generator[Session, None, None]:
    """
    Get database session.

    Used as a FastAPI dependency and by repositories that own their session.

    Yields:
        Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Optional[Engine] = None):
    """
    Initialize database (create all tables).

    Args:
        engine: Engine to create tables on (defaults to the process-wide engine)
    """
    # Import all models here to ensure they're registered
    from src.models import (  # noqa: F401
        user,
        team,
        template,
        report,
        sheet_columns,
    )

    Base.metadata.create_all(bind=engine or get_engine())
