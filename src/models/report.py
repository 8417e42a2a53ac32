"""Report model - one submission from a team member."""
from functools import partial

from sqlalchemy import Column, String, Text, BigInteger, DateTime, ForeignKey, JSON
from datetime import datetime

from src.config.database import Base
from src.utils.ids import generate_id, isoformat


class Report(Base):
    """
    Report model.

    Two shapes share the table:
    - Template-driven: template_id set, answers maps field id -> value.
    - Legacy: template_id NULL, description/priority/status/category set.
    """

    __tablename__ = "reports"

    id = Column(String(64), primary_key=True, default=partial(generate_id, "report"))

    user_id = Column(
        BigInteger, ForeignKey("users.telegram_id"), nullable=False, index=True
    )
    # Checked on create, not a foreign key: reports outlive a deleted team
    team_id = Column(String(64), nullable=False, index=True)
    template_id = Column(String(64), ForeignKey("templates.id"), nullable=True)

    title = Column(String(500), nullable=False)

    # Template-driven shape
    answers = Column(JSON)

    # Legacy shape
    description = Column(Text)
    priority = Column(String(20))  # 'low', 'medium', 'high'
    status = Column(String(20))  # 'pending', 'in-progress', 'completed'
    category = Column(String(100))

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self) -> dict:
        answers = dict(self.answers) if self.answers is not None else None
        return {
            "id": self.id,
            "userId": self.user_id,
            "teamId": self.team_id,
            "templateId": self.template_id,
            "title": self.title,
            "description": self.description,
            "answers": answers,
            "templateData": answers,
            "priority": self.priority,
            "status": self.status,
            "category": self.category,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Report {self.id} team={self.team_id} user={self.user_id}>"
