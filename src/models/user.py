"""User model - auto-populated from Telegram identity."""
from sqlalchemy import Column, String, BigInteger, DateTime, ForeignKey
from datetime import datetime

from src.config.constants import ROLE_EMPLOYEE
from src.config.database import Base
from src.utils.ids import isoformat


class User(Base):
    """
    User model.

    Keyed by the Telegram numeric identity. Users are created on first
    contact (Mini App session or bot /start) or by an admin, and are never
    hard-deleted; deleting a team only clears team_id.
    """

    __tablename__ = "users"

    # Telegram identity (source of truth, immutable)
    telegram_id = Column(BigInteger, primary_key=True, autoincrement=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255))
    username = Column(String(100))
    photo_url = Column(String(1024))

    # Team membership
    team_id = Column(
        String(64), ForeignKey("teams.id", ondelete="SET NULL"), index=True
    )

    # Role is an open string; "admin" and "employee" are the conventional values
    role = Column(String(50), nullable=False, default=ROLE_EMPLOYEE)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "telegramId": self.telegram_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "username": self.username,
            "photoUrl": self.photo_url,
            "teamId": self.team_id,
            "role": self.role,
            "createdAt": isoformat(self.created_at),
        }

    @property
    def display_name(self) -> str:
        """Full name, falling back to @username or the Telegram ID."""
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        if name:
            return name
        if self.username:
            return f"@{self.username}"
        return f"ID:{self.telegram_id}"

    def __repr__(self):
        return f"<User {self.username or self.telegram_id} ({self.role})>"
