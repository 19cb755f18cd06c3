"""Admin-only user management."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.schemas.archive import MessageResponse
from app.schemas.auth import CurrentUser
from app.schemas.user import UserCreate, UserCreatedResponse, UserRead, UserUpdate
from app.services import users as user_service

router = APIRouter()


@router.get("", response_model=list[UserRead])
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserRead]:
    """List all users, newest first (admin only)."""
    return user_service.list_users(db)


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserCreatedResponse:
    """Create an active account. A duplicate username is rejected with 400."""
    return UserCreatedResponse(id=user_service.create_user(db, body))


@router.put("/{user_id}", response_model=MessageResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Overwrite username, name, email, role and status. Passwords are changed via /profile."""
    user_service.update_user(db, user_id, body)
    return MessageResponse(message="User updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete another user. Admins cannot delete their own account."""
    user_service.delete_user(db, admin, user_id)
    return MessageResponse(message="User deleted successfully")
