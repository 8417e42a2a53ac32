"""User repository - CRUD operations for users."""

from typing import Optional

from src.config.constants import ROLE_EMPLOYEE
from src.exceptions import ConstraintViolationError, DuplicateKeyError
from src.repositories.base_repository import BaseRepository
from src.models.team import Team
from src.models.user import User
from src.utils.logger import logger


class UserRepository(BaseRepository):
    """Repository for User CRUD operations."""

    UPDATABLE_FIELDS = {
        "first_name",
        "last_name",
        "username",
        "photo_url",
        "team_id",
        "role",
    }

    def get_by_telegram_id(self, telegram_id: int) -> Optional[User]:
        """Get user by Telegram user ID."""
        result = self.db.query(User).filter(User.telegram_id == telegram_id).first()
        self.end_read_transaction()
        return result

    def get_all(
        self, team_id: Optional[str] = None, role: Optional[str] = None
    ) -> list[User]:
        """Get all users, optionally filtered by team and/or role."""
        query = self.db.query(User)

        if team_id is not None:
            query = query.filter(User.team_id == team_id)
        if role is not None:
            query = query.filter(User.role == role)

        result = query.order_by(User.created_at.desc()).all()
        self.end_read_transaction()
        return result

    def create(
        self,
        telegram_id: int,
        first_name: str,
        last_name: Optional[str] = None,
        username: Optional[str] = None,
        photo_url: Optional[str] = None,
        team_id: Optional[str] = None,
        role: str = ROLE_EMPLOYEE,
    ) -> User:
        """Create a new user.

        Raises:
            DuplicateKeyError: If a user with this telegram_id exists
            ConstraintViolationError: If team_id names a missing team
        """
        if self.db.get(User, telegram_id) is not None:
            raise DuplicateKeyError(
                f"User {telegram_id} already exists", entity="user", key=telegram_id
            )
        self._check_team(team_id)

        user = User(
            telegram_id=telegram_id,
            first_name=first_name,
            last_name=last_name,
            username=username,
            photo_url=photo_url,
            team_id=team_id,
            role=role,
        )
        self.db.add(user)
        self._commit_or_raise(
            lambda e: DuplicateKeyError(
                f"User {telegram_id} already exists", entity="user", key=telegram_id
            )
        )
        self.db.refresh(user)
        logger.info(f"Created user {telegram_id} (role={role})")
        return user

    def update(self, telegram_id: int, **fields) -> Optional[User]:
        """Merge fields into a user. Returns None if the user does not exist.

        telegram_id itself is never changed; unknown keys are ignored.

        Raises:
            ConstraintViolationError: If team_id names a missing team
        """
        user = self.db.get(User, telegram_id)
        if user is None:
            self.end_read_transaction()
            return None

        ignored = set(fields) - self.UPDATABLE_FIELDS
        if ignored:
            logger.debug(f"Ignoring non-updatable user fields: {sorted(ignored)}")

        changes = {k: v for k, v in fields.items() if k in self.UPDATABLE_FIELDS}
        if "team_id" in changes:
            self._check_team(changes["team_id"])

        for name, value in changes.items():
            setattr(user, name, value)

        self.commit()
        self.db.refresh(user)
        return user

    def update_role(self, telegram_id: int, role: str) -> Optional[User]:
        """Update user's role."""
        return self.update(telegram_id, role=role)

    def _check_team(self, team_id: Optional[str]):
        if team_id is not None and self.db.get(Team, team_id) is None:
            raise ConstraintViolationError(
                f"Team not found: {team_id}", entity="user", field="team_id"
            )
