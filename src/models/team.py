"""Team model - organizational grouping bound to a report template."""
from functools import partial

from sqlalchemy import Column, String, Text, BigInteger, DateTime, ForeignKey
from datetime import datetime

from src.config.database import Base
from src.utils.ids import generate_id, isoformat


class Team(Base):
    """
    Team model.

    template_id decides which form members fill in. Members point at the
    team through User.team_id; there is no cascade from team to users.
    """

    __tablename__ = "teams"

    id = Column(String(64), primary_key=True, default=partial(generate_id, "team"))
    name = Column(String(255), nullable=False)
    description = Column(Text)

    template_id = Column(
        String(64), ForeignKey("templates.id", ondelete="SET NULL"), nullable=True
    )

    # Creator's telegram id (not a foreign key: admins may act before registering)
    created_by = Column(BigInteger, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "templateId": self.template_id,
            "createdBy": self.created_by,
            "createdAt": isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<Team {self.name} ({self.id})>"
