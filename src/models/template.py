"""Template model - durable copy of a catalog report template."""
from sqlalchemy import Column, String, Text, BigInteger, DateTime, JSON
from datetime import datetime

from src.config.database import Base
from src.utils.ids import isoformat


class Template(Base):
    """
    Stored report template.

    Rows mirror the in-code catalog so Team.template_id and
    Report.template_id resolve as foreign keys. fields holds the ordered
    list of field descriptors as JSON.
    """

    __tablename__ = "templates"

    id = Column(String(64), primary_key=True)
    key = Column(String(64), unique=True, nullable=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    fields = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)
    created_by = Column(BigInteger, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "fields": list(self.fields or []),
            "createdAt": isoformat(self.created_at),
            "createdBy": self.created_by,
        }

    def __repr__(self):
        return f"<Template {self.id} ({len(self.fields or [])} fields)>"
