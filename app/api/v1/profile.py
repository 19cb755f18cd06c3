"""Self-service profile for the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.archive import MessageResponse
from app.schemas.auth import CurrentUser
from app.schemas.user import ProfileRead, ProfileUpdate
from app.services import users as user_service

router = APIRouter()


@router.get("", response_model=ProfileRead)
def get_profile(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileRead:
    return user_service.get_profile(db, user)


@router.put("", response_model=MessageResponse)
def update_profile(
    body: ProfileUpdate,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """
    Update name and email. To change the password send `new_password` together
    with `current_password`; a wrong current password is rejected with 401.
    """
    user_service.update_profile(db, user, body)
    return MessageResponse(message="Profile updated successfully")
