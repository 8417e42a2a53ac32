"""Health endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.dependencies import get_db
from src.repositories.base_repository import BaseRepository
from src.utils.logger import logger

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db: Session = Depends(get_db)):
    """Liveness plus a database round trip."""
    try:
        BaseRepository.check_connection(db)
        database = "ok"
    except Exception as e:
        logger.error(f"Health check database error: {e}")
        database = "error"
    return {"status": "ok" if database == "ok" else "degraded", "database": database}
