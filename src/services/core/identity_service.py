"""Identity service - maps Telegram identities to users."""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from src.config.constants import PLACEHOLDER_FIRST_NAME, ROLE_ADMIN, ROLE_EMPLOYEE
from src.config.settings import settings
from src.exceptions import DuplicateKeyError
from src.models.user import User
from src.repositories.user_repository import UserRepository
from src.services.base_service import BaseService
from src.utils.logger import logger


@dataclass
class ResolvedIdentity:
    """Result of resolving a Telegram identity.

    Attributes:
        user: Stored (possibly just created or patched) user
        is_admin: Allow-list membership or stored admin role
        created: True when the user was auto-provisioned by this call
    """

    user: User
    is_admin: bool
    created: bool = False

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_dict(),
            "isAdmin": self.is_admin,
            "created": self.created,
        }


class IdentityService(BaseService):
    """
    Resolve a Telegram identity to a User.

    Users are auto-provisioned on first contact. Profile fields that drifted
    on Telegram's side are re-synced. Membership in TELEGRAM_ADMIN_IDS always
    wins over a stale stored role.

    The caller must have verified the identity (e.g. with
    validate_init_data) before calling resolve().
    """

    def __init__(self, db: Optional[Session] = None, admin_ids: Optional[set[int]] = None):
        super().__init__()
        self.user_repo = UserRepository(db)
        self._admin_ids = admin_ids

    @property
    def admin_ids(self) -> set[int]:
        if self._admin_ids is None:
            return settings.admin_ids
        return self._admin_ids

    def is_allow_listed(self, telegram_id: int) -> bool:
        return telegram_id in self.admin_ids

    def role_for_new_user(self, telegram_id: int) -> str:
        return ROLE_ADMIN if self.is_allow_listed(telegram_id) else ROLE_EMPLOYEE

    def resolve(
        self,
        telegram_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        username: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> ResolvedIdentity:
        """
        Look up (or create) the user for a Telegram identity.

        Profile fields passed as None are treated as "not presented" and
        never overwrite stored values.

        Args:
            telegram_id: Telegram numeric user ID
            first_name: Presented first name
            last_name: Presented last name
            username: Presented @username (without @)
            photo_url: Presented avatar URL

        Returns:
            ResolvedIdentity with the user and effective admin flag
        """
        presented = {
            "first_name": first_name,
            "last_name": last_name,
            "username": username,
            "photo_url": photo_url,
        }

        user = self.user_repo.get_by_telegram_id(telegram_id)
        created = False

        if user is None:
            user, created = self._provision(telegram_id, presented)
        else:
            user = self._sync_profile(user, presented)

        allow_listed = self.is_allow_listed(telegram_id)
        if allow_listed and user.role != ROLE_ADMIN:
            logger.info(
                f"Correcting role for allow-listed user {telegram_id}: "
                f"{user.role} -> {ROLE_ADMIN}"
            )
            user = self.user_repo.update_role(telegram_id, ROLE_ADMIN)

        is_admin = allow_listed or user.role == ROLE_ADMIN
        return ResolvedIdentity(user=user, is_admin=is_admin, created=created)

    def _provision(self, telegram_id: int, presented: dict) -> tuple[User, bool]:
        role = self.role_for_new_user(telegram_id)
        try:
            user = self.user_repo.create(
                telegram_id=telegram_id,
                first_name=presented["first_name"] or PLACEHOLDER_FIRST_NAME,
                last_name=presented["last_name"],
                username=presented["username"],
                photo_url=presented["photo_url"],
                role=role,
            )
        except DuplicateKeyError:
            # Lost a race with a concurrent first contact; use the winner's row
            logger.info(f"User {telegram_id} created concurrently, re-reading")
            existing = self.user_repo.get_by_telegram_id(telegram_id)
            return self._sync_profile(existing, presented), False

        logger.info(f"Auto-provisioned user {telegram_id} with role {role}")
        return user, True

    def _sync_profile(self, user: User, presented: dict) -> User:
        changes = {
            name: value
            for name, value in presented.items()
            if value is not None and getattr(user, name) != value
        }
        if not changes:
            return user

        logger.info(
            f"Syncing profile for user {user.telegram_id}: {sorted(changes)}"
        )
        return self.user_repo.update(user.telegram_id, **changes)
