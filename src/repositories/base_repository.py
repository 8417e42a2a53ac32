"""Base repository class with borrowed-or-owned session handling."""

from typing import Optional

from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config.database import get_db
from src.utils.logger import logger


class BaseRepository:
    """
    Base class for all repositories.

    A repository either borrows a session handed in by its caller (a
    request-scoped FastAPI dependency, or a test fixture) or opens and owns
    one itself. Only owned sessions are closed, recovered or committed after
    reads; a borrowed session belongs to whoever passed it in.

    Writers call commit(); readers call end_read_transaction() so owned
    sessions never sit "idle in transaction".
    """

    def __init__(self, db: Optional[Session] = None):
        self._owns_session = db is None
        self._db_generator = None
        if db is None:
            self._open_session()
        else:
            self._db: Session = db

    def _open_session(self):
        self._db_generator = get_db()
        self._db = next(self._db_generator)

    def _reopen_session(self, reason: str):
        logger.warning(f"Replacing unusable database session: {reason}")
        self._discard_session()
        self._open_session()

    @property
    def db(self) -> Session:
        """The session, rolled back first if a previous statement failed."""
        try:
            if not self._db.is_active:
                self._db.rollback()
        except Exception as e:
            if not self._owns_session:
                raise
            self._reopen_session(str(e))
        return self._db

    def commit(self):
        """Commit the current transaction, rolling back on failure."""
        try:
            self._db.commit()
        except Exception as e:
            logger.warning(f"Commit failed, rolling back: {e}")
            self._db.rollback()
            raise

    def rollback(self):
        """Rollback the current transaction."""
        try:
            self._db.rollback()
        except Exception as e:
            logger.warning(f"Rollback failed: {e}")

    def end_read_transaction(self):
        """Release the implicit transaction a SELECT opened on an owned session."""
        if not self._owns_session:
            return
        try:
            self._db.commit()
        except Exception:
            try:
                self._db.rollback()
            except Exception as e:
                self._reopen_session(str(e))

    def _commit_or_raise(self, integrity_error_factory):
        """Commit; turn an IntegrityError into the repository's own error."""
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            logger.warning(f"Integrity error on commit: {e.orig}")
            raise integrity_error_factory(e) from e
        except Exception as e:
            logger.warning(f"Commit failed, rolling back: {e}")
            self._db.rollback()
            raise

    def restore(self, instance) -> bool:
        """
        Insert a row that already carries its primary key, as an import does.

        Returns:
            True if inserted, False if a row with the same key exists
        """
        model = type(instance)
        key = tuple(inspect(model).primary_key_from_instance(instance))
        if self.db.get(model, key if len(key) > 1 else key[0]) is not None:
            self.end_read_transaction()
            return False

        self.db.add(instance)
        self.commit()
        return True

    def _discard_session(self):
        try:
            self._db.close()
        except Exception as e:
            logger.debug(f"Ignoring error while closing session: {e}")

    def close(self):
        """Return an owned session's connection to the pool; no-op when borrowed."""
        if not self._owns_session:
            return
        try:
            # Drive get_db() past its yield so its finally block runs
            next(self._db_generator, None)
        except Exception as e:
            logger.warning(f"Error closing database session: {e}")
        finally:
            self._discard_session()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @staticmethod
    def check_connection(db: Optional[Session] = None):
        """
        Run SELECT 1 on the given session, or on a short-lived one.

        Raises:
            Exception: If the database is unreachable
        """
        if db is not None:
            db.execute(text("SELECT 1"))
            return

        session = next(get_db())
        try:
            session.execute(text("SELECT 1"))
        finally:
            session.close()
