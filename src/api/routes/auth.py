"""Session endpoint - verify Telegram initData and resolve the caller."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.dependencies import get_db
from src.api.routes.helpers import _validate_request
from src.api.routes.models import SessionRequest
from src.services.core.identity_service import IdentityService

router = APIRouter(tags=["auth"])


@router.post("/auth/session")
async def create_session(request: SessionRequest, db: Session = Depends(get_db)):
    """Resolve the Mini App user behind a signed initData string.

    Auto-provisions first-time users and reports whether they are admins.
    """
    user_info = _validate_request(request.init_data)

    identity = IdentityService(db).resolve(
        telegram_id=user_info["user_id"],
        first_name=user_info.get("first_name"),
        last_name=user_info.get("last_name"),
        username=user_info.get("username"),
        photo_url=user_info.get("photo_url"),
    )
    return identity.to_dict()
