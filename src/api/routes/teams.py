"""Team endpoints - list, create, retarget and delete teams."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.api.dependencies import get_db, get_template_registry
from src.api.routes.helpers import store_error_handler
from src.api.routes.models import TeamCreateRequest, TeamUpdateRequest
from src.repositories.team_repository import TeamRepository
from src.services.core.template_registry import TemplateRegistry
from src.utils.logger import logger

router = APIRouter(tags=["teams"])


def resolve_template_id(
    registry: TemplateRegistry, db: Session, template_id: Optional[str]
) -> Optional[str]:
    """Map a template id or key to a stored template id; None clears.

    Raises HTTPException(400) for ids that are not in the catalog.
    """
    if not template_id:
        return None
    template = registry.get_template(template_id)
    if template is None:
        raise HTTPException(status_code=400, detail="Invalid template ID")
    registry.ensure_synced(db)
    return template.id


@router.get("/teams")
async def get_teams(
    team_id: Optional[str] = Query(default=None, alias="id"),
    db: Session = Depends(get_db),
):
    """One team with its members, or all teams."""
    team_repo = TeamRepository(db)
    if team_id:
        team = team_repo.get_by_id(team_id)
        if team is None:
            raise HTTPException(status_code=404, detail="Team not found")
        members = team_repo.get_members(team_id)
        return {
            "team": {**team.to_dict(), "members": [m.to_dict() for m in members]}
        }
    return {"teams": [team.to_dict() for team in team_repo.get_all()]}


@router.post("/teams", status_code=201)
async def create_team(
    request: TeamCreateRequest,
    db: Session = Depends(get_db),
    registry: TemplateRegistry = Depends(get_template_registry),
):
    """Create a team with a generated ID."""
    if not request.name.strip():
        raise HTTPException(status_code=400, detail="Team name is required")

    template_id = resolve_template_id(registry, db, request.template_id)
    with store_error_handler():
        team = TeamRepository(db).create(
            name=request.name.strip(),
            created_by=request.created_by,
            description=request.description or "",
            template_id=template_id,
        )
    return {"team": team.to_dict()}


@router.patch("/teams")
async def update_team(
    request: TeamUpdateRequest,
    db: Session = Depends(get_db),
    registry: TemplateRegistry = Depends(get_template_registry),
):
    """Update a team's template assignment, name or description."""
    changes = request.updates("team_id")
    if "template_id" in changes:
        changes["template_id"] = resolve_template_id(
            registry, db, changes["template_id"]
        )
    if "name" in changes and not (changes["name"] or "").strip():
        raise HTTPException(status_code=400, detail="Team name is required")

    with store_error_handler():
        team = TeamRepository(db).update(request.team_id, **changes)
    if team is None:
        raise HTTPException(status_code=404, detail="Team not found")
    return {"team": team.to_dict()}


@router.delete("/teams")
async def delete_team(
    team_id: Optional[str] = Query(default=None, alias="id"),
    db: Session = Depends(get_db),
):
    """Delete a team; its members become unassigned."""
    if not team_id:
        raise HTTPException(status_code=400, detail="Team ID is required")

    if not TeamRepository(db).delete(team_id):
        raise HTTPException(status_code=404, detail="Team not found")

    logger.info(f"Team {team_id} deleted via API")
    return {"success": True}
