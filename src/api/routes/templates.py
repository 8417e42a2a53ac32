"""Template endpoints - browse the catalog and assign templates to teams."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.api.dependencies import get_db, get_template_registry
from src.api.routes.helpers import store_error_handler
from src.api.routes.models import TemplateAssignRequest
from src.api.routes.teams import resolve_template_id
from src.repositories.team_repository import TeamRepository
from src.services.core.template_registry import TemplateRegistry

router = APIRouter(tags=["templates"])


@router.get("/templates")
async def get_templates(
    template_id: Optional[str] = Query(default=None, alias="id"),
    db: Session = Depends(get_db),
    registry: TemplateRegistry = Depends(get_template_registry),
):
    """One template by ID or key, or the whole catalog."""
    registry.ensure_synced(db)

    if template_id:
        template = registry.get_template(template_id)
        if template is None:
            raise HTTPException(status_code=404, detail="Template not found")
        return {"template": template.to_dict()}
    return {"templates": [t.to_dict() for t in registry.list_templates()]}


@router.patch("/templates")
async def assign_template(
    request: TemplateAssignRequest,
    db: Session = Depends(get_db),
    registry: TemplateRegistry = Depends(get_template_registry),
):
    """Assign a template to a team (templateId null clears it)."""
    template_id = resolve_template_id(registry, db, request.template_id)
    with store_error_handler():
        team = TeamRepository(db).set_template(request.team_id, template_id)
    if team is None:
        raise HTTPException(status_code=404, detail="Team not found")
    return {"team": team.to_dict()}
