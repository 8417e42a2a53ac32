"""Entity store exceptions."""

from typing import Any, Optional

from src.exceptions.base import TeamReportsError


class StoreError(TeamReportsError):
    """General entity store error."""

    def __init__(self, message: str, entity: Optional[str] = None):
        super().__init__(message)
        self.entity = entity


class NotFoundError(StoreError):
    """Referenced entity does not exist.

    Repositories return None for plain lookups; this is raised by services
    that need the entity to continue.
    """

    def __init__(
        self,
        message: str = "Entity not found",
        entity: Optional[str] = None,
        key: Any = None,
    ):
        super().__init__(message, entity=entity)
        self.key = key


class DuplicateKeyError(StoreError):
    """Create collided with an existing natural key (e.g. telegram id)."""

    def __init__(
        self,
        message: str = "Entity already exists",
        entity: Optional[str] = None,
        key: Any = None,
    ):
        super().__init__(message, entity=entity)
        self.key = key


class ConstraintViolationError(StoreError):
    """A foreign key target is missing or a column constraint failed."""

    def __init__(
        self,
        message: str = "Constraint violated",
        entity: Optional[str] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message, entity=entity)
        self.field = field
