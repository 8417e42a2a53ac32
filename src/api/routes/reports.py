"""Report endpoints - list, submit and update reports."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.api.dependencies import get_db, get_sheets_service, get_template_registry
from src.api.routes.helpers import store_error_handler
from src.api.routes.models import ReportCreateRequest, ReportUpdateRequest
from src.repositories.report_repository import ReportRepository
from src.services.core.report_submission import ReportSubmissionService
from src.services.core.template_registry import TemplateRegistry
from src.services.integrations.google_sheets import GoogleSheetsService

router = APIRouter(tags=["reports"])


@router.get("/reports")
async def list_reports(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    team_id: Optional[str] = Query(default=None, alias="teamId"),
    db: Session = Depends(get_db),
):
    """Reports by submitter, by team, or all of them; newest first."""
    report_repo = ReportRepository(db)
    if user_id is not None:
        reports = report_repo.get_all(user_id=user_id)
    elif team_id:
        reports = report_repo.get_all(team_id=team_id)
    else:
        reports = report_repo.get_all()
    return {"reports": [report.to_dict() for report in reports]}


@router.post("/reports", status_code=201)
async def create_report(
    request: ReportCreateRequest,
    db: Session = Depends(get_db),
    registry: TemplateRegistry = Depends(get_template_registry),
    sheets_service: GoogleSheetsService = Depends(get_sheets_service),
):
    """Submit a report.

    A Google Sheets failure does not fail the request; the response then
    carries a "warning" next to the saved report.
    """
    service = ReportSubmissionService(
        db, registry=registry, sheets_service=sheets_service
    )
    with store_error_handler():
        result = await service.submit(
            user_id=request.user_id,
            team_id=request.team_id,
            template_id=request.template_id,
            title=request.title,
            answers=request.effective_answers,
            description=request.description,
            priority=request.priority,
            status=request.status,
            category=request.category,
            sync_to_sheets=request.sync_to_sheets,
        )
    return result.to_dict()


@router.patch("/reports")
async def update_report(request: ReportUpdateRequest, db: Session = Depends(get_db)):
    """Patch a report's mutable fields."""
    service = ReportSubmissionService(db)
    with store_error_handler():
        report = service.update_report(request.id, **request.updates())
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return {"report": report.to_dict()}
