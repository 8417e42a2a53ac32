"""Template repository - durable copies of catalog templates."""

from typing import Optional

from sqlalchemy import func

from src.repositories.base_repository import BaseRepository
from src.models.template import Template


class TemplateRepository(BaseRepository):
    """Repository for Template rows."""

    def get_by_id(self, template_id: str) -> Optional[Template]:
        """Get template by ID."""
        result = self.db.get(Template, template_id)
        self.end_read_transaction()
        return result

    def get_all(self) -> list[Template]:
        """Get all stored templates."""
        result = self.db.query(Template).order_by(Template.created_at).all()
        self.end_read_transaction()
        return result

    def count(self) -> int:
        """Number of stored template rows."""
        result = self.db.query(func.count(Template.id)).scalar()
        self.end_read_transaction()
        return result or 0

    def create_if_absent(
        self,
        template_id: str,
        name: str,
        fields: list[dict],
        key: Optional[str] = None,
        description: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> bool:
        """
        Insert a template row unless one with the same ID exists.

        Returns:
            True if a row was inserted, False if it already existed
        """
        if self.db.get(Template, template_id) is not None:
            self.end_read_transaction()
            return False

        self.db.add(
            Template(
                id=template_id,
                key=key,
                name=name,
                description=description,
                fields=fields,
                created_by=created_by,
            )
        )
        self.commit()
        return True
