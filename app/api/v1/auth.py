"""JWT login and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.user import ROLE_ADMIN
from app.schemas.auth import CurrentUser, LoginRequest, LoginResponse
from app.services import auth as auth_service

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT and the user's public profile.
    Include the token in the Authorization header as: Bearer <token>
    """
    return auth_service.login(db, body.username, body.password)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the identity it carries.
    Raises 401 if the token is missing, malformed, tampered with or expired.
    """
    token = credentials.credentials if credentials is not None else None
    return auth_service.verify_token(token)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    return auth_service.require_role(current_user, ROLE_ADMIN)
