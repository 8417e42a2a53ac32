"""Google Sheets endpoints - links into the report spreadsheet."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from src.api.dependencies import get_sheets_service
from src.exceptions import GoogleSheetsError, GoogleSheetsNotConfiguredError
from src.services.integrations.google_sheets import GoogleSheetsService

router = APIRouter(tags=["sheets"])


@router.get("/sheets")
async def get_sheet_link(
    team: Optional[str] = Query(default=None),
    sheets_service: GoogleSheetsService = Depends(get_sheets_service),
):
    """Spreadsheet URL, optionally pointing at a team's tab."""
    if not sheets_service.is_configured:
        return {"url": "#", "configured": False}

    sheet_title = None
    if team:
        sheet_title = f"Team_{sheets_service.sanitize_name(team)}"
    return {
        "url": sheets_service.get_sheet_url(sheet_title),
        "configured": True,
        "spreadsheetId": sheets_service.spreadsheet_id,
    }


@router.get("/sheets/info")
async def get_sheet_info(
    sheets_service: GoogleSheetsService = Depends(get_sheets_service),
):
    """Spreadsheet title and tabs with direct links."""
    try:
        return sheets_service.get_spreadsheet_info()
    except GoogleSheetsNotConfiguredError:
        raise HTTPException(status_code=503, detail="Google Sheets not configured")
    except GoogleSheetsError as e:
        raise HTTPException(status_code=502, detail=f"Google Sheets error: {e}")
