"""User endpoints - list, register and update users."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.api.dependencies import get_db
from src.api.routes.helpers import store_error_handler
from src.api.routes.models import UserCreateRequest, UserUpdateRequest
from src.repositories.user_repository import UserRepository
from src.services.core.identity_service import IdentityService

router = APIRouter(tags=["users"])


@router.get("/users")
async def get_users(
    telegram_id: Optional[int] = Query(default=None, alias="telegramId"),
    db: Session = Depends(get_db),
):
    """One user by Telegram ID, or all users."""
    user_repo = UserRepository(db)
    if telegram_id is not None:
        user = user_repo.get_by_telegram_id(telegram_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        return {"user": user.to_dict()}
    return {"users": [user.to_dict() for user in user_repo.get_all()]}


@router.post("/users", status_code=201)
async def create_user(request: UserCreateRequest, db: Session = Depends(get_db)):
    """Register a user; the role comes from the admin allow-list."""
    role = IdentityService(db).role_for_new_user(request.telegram_id)
    with store_error_handler():
        user = UserRepository(db).create(
            telegram_id=request.telegram_id,
            first_name=request.first_name,
            last_name=request.last_name,
            username=request.username,
            photo_url=request.photo_url,
            team_id=request.team_id,
            role=role,
        )
    return {"user": user.to_dict()}


@router.patch("/users")
async def update_user(request: UserUpdateRequest, db: Session = Depends(get_db)):
    """Patch profile fields, team assignment or role."""
    changes = request.updates("telegram_id")
    if "first_name" in changes and not (changes["first_name"] or "").strip():
        raise HTTPException(status_code=400, detail="First name cannot be empty")
    if "role" in changes and not changes["role"]:
        raise HTTPException(status_code=400, detail="Role cannot be empty")

    with store_error_handler():
        user = UserRepository(db).update(request.telegram_id, **changes)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {"user": user.to_dict()}
