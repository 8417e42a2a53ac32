"""Team repository - CRUD operations for teams."""

from typing import Optional

from src.exceptions import ConstraintViolationError
from src.repositories.base_repository import BaseRepository
from src.models.team import Team
from src.models.template import Template
from src.models.user import User
from src.utils.logger import logger


class TeamRepository(BaseRepository):
    """Repository for Team CRUD operations."""

    UPDATABLE_FIELDS = {"name", "description", "template_id"}

    def get_by_id(self, team_id: str) -> Optional[Team]:
        """Get team by ID."""
        result = self.db.get(Team, team_id)
        self.end_read_transaction()
        return result

    def get_all(self) -> list[Team]:
        """Get all teams, newest first."""
        result = self.db.query(Team).order_by(Team.created_at.desc()).all()
        self.end_read_transaction()
        return result

    def get_members(self, team_id: str) -> list[User]:
        """Get users assigned to a team."""
        result = (
            self.db.query(User)
            .filter(User.team_id == team_id)
            .order_by(User.created_at)
            .all()
        )
        self.end_read_transaction()
        return result

    def create(
        self,
        name: str,
        created_by: int,
        description: Optional[str] = None,
        template_id: Optional[str] = None,
    ) -> Team:
        """Create a new team with a generated ID."""
        self._check_template(template_id)

        team = Team(
            name=name,
            description=description,
            created_by=created_by,
            template_id=template_id,
        )
        self.db.add(team)
        self.commit()
        self.db.refresh(team)
        logger.info(f"Created team '{name}' ({team.id}) by {created_by}")
        return team

    def update(self, team_id: str, **fields) -> Optional[Team]:
        """Merge fields into a team. Returns None if the team does not exist.

        Raises:
            ConstraintViolationError: If template_id names a missing template
        """
        team = self.db.get(Team, team_id)
        if team is None:
            self.end_read_transaction()
            return None

        changes = {k: v for k, v in fields.items() if k in self.UPDATABLE_FIELDS}
        if "template_id" in changes:
            self._check_template(changes["template_id"])

        for name, value in changes.items():
            setattr(team, name, value)

        self.commit()
        self.db.refresh(team)
        return team

    def set_template(self, team_id: str, template_id: Optional[str]) -> Optional[Team]:
        """Assign (or clear, with None) the team's report template."""
        return self.update(team_id, template_id=template_id)

    def delete(self, team_id: str) -> bool:
        """
        Delete a team and unassign its members in one transaction.

        Returns:
            True if the team existed and was deleted, False otherwise
        """
        team = self.db.get(Team, team_id)
        if team is None:
            self.end_read_transaction()
            return False

        try:
            unassigned = (
                self.db.query(User)
                .filter(User.team_id == team_id)
                .update({User.team_id: None}, synchronize_session="fetch")
            )
            self.db.delete(team)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(
                f"Failed to delete team {team_id}; members and team left unchanged: {e}",
                exc_info=True,
            )
            raise

        logger.info(f"Deleted team {team_id}, unassigned {unassigned} member(s)")
        return True

    def _check_template(self, template_id: Optional[str]):
        if template_id is not None and self.db.get(Template, template_id) is None:
            raise ConstraintViolationError(
                f"Template not found: {template_id}",
                entity="team",
                field="template_id",
            )
