"""Login, token verification and role checks."""

import logging

import jwt
from sqlalchemy.orm import Session

from app.core.errors import (
    ForbiddenError,
    InvalidCredentialsError,
    InvalidInputError,
    UnauthenticatedError,
)
from app.core.security import create_access_token, decode_access_token, verify_password
from app.models.base import utcnow
from app.models.user import STATUS_ACTIVE, User
from app.schemas.auth import CurrentUser, LoginResponse, PublicUser

logger = logging.getLogger(__name__)


def login(db: Session, username: str, password: str) -> LoginResponse:
    """
    Authenticate an active user by exact username and password.

    Unknown usernames, inactive accounts and wrong passwords all fail the same
    way so callers cannot probe which usernames exist. On success last_login is
    updated and a signed token plus the public identity is returned.
    """
    if not username:
        raise InvalidInputError("Username and password are required", field="username")
    if not password:
        raise InvalidInputError("Username and password are required", field="password")

    user = (
        db.query(User)
        .filter(User.username == username, User.status == STATUS_ACTIVE)
        .first()
    )
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for username=%r", username)
        raise InvalidCredentialsError("Invalid username or password.")

    user.last_login = utcnow()
    db.commit()
    logger.info("User logged in: id=%s username=%r", user.id, user.username)

    token = create_access_token(user_id=user.id, username=user.username, role=user.role)
    return LoginResponse(token=token, user=PublicUser.model_validate(user))


def verify_token(token: str | None) -> CurrentUser:
    """
    Decode a bearer token into the caller's identity.

    Only signature, expiry and claim shape are checked; the account's current
    status is not re-read, so a deactivated user keeps access until expiry.
    """
    if not token:
        raise UnauthenticatedError("Not authenticated")
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError as e:
        raise UnauthenticatedError("Token has expired") from e
    except jwt.PyJWTError as e:
        raise UnauthenticatedError("Invalid token") from e
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise UnauthenticatedError("Invalid token payload") from e
    username = payload.get("username")
    role = payload.get("role")
    if not isinstance(username, str) or not isinstance(role, str):
        raise UnauthenticatedError("Invalid token payload")
    return CurrentUser(id=user_id, username=username, role=role)


def require_role(identity: CurrentUser, role: str) -> CurrentUser:
    """Return the identity unchanged, or raise ForbiddenError when its role differs."""
    if identity.role != role:
        raise ForbiddenError(f"{role.capitalize()} access required")
    return identity
