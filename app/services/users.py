"""Admin user management and self-service profile updates."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidOperationError,
    NotFoundError,
)
from app.core.security import hash_password, verify_password
from app.models.user import STATUS_ACTIVE, User
from app.schemas.auth import CurrentUser
from app.schemas.user import ProfileRead, ProfileUpdate, UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

USERNAME_INDEX = "ix_users_username"


def _get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _username_taken(db: Session, username: str, exclude_id: int | None = None) -> bool:
    query = db.query(User.id).filter(User.username == username)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def _is_username_violation(error: IntegrityError) -> bool:
    # PostgreSQL names the violated index; SQLite names the column.
    message = str(error.orig)
    return USERNAME_INDEX in message or "users.username" in message


def _commit_username_change(db: Session, username: str) -> None:
    """Commit, turning a unique-index violation on username into ConflictError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not _is_username_violation(e):
            raise
        raise ConflictError(f"Username '{username}' already exists") from e


def list_users(db: Session) -> list[UserRead]:
    """All users without password hashes, newest first."""
    users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return [UserRead.model_validate(u) for u in users]


def create_user(db: Session, data: UserCreate) -> int:
    """
    Create an active account and return its id.

    The pre-check gives a clean error for the common case; the unique index on
    username catches concurrent inserts that slip past it.
    """
    if _username_taken(db, data.username):
        raise ConflictError(f"Username '{data.username}' already exists")
    user = User(
        username=data.username,
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role,
        status=STATUS_ACTIVE,
    )
    db.add(user)
    _commit_username_change(db, data.username)
    logger.info("User created: id=%s username=%r role=%s", user.id, user.username, user.role)
    return user.id


def update_user(db: Session, user_id: int, data: UserUpdate) -> None:
    """Overwrite username, name, email, role and status. Keeping the same username is allowed."""
    user = _get_user(db, user_id)
    if _username_taken(db, data.username, exclude_id=user_id):
        raise ConflictError(f"Username '{data.username}' already exists")
    user.username = data.username
    user.name = data.name
    user.email = data.email
    user.role = data.role
    user.status = data.status
    _commit_username_change(db, data.username)
    logger.info("User updated: id=%s role=%s status=%s", user_id, data.role, data.status)


def delete_user(db: Session, identity: CurrentUser, user_id: int) -> None:
    """
    Delete another user's account.

    Their archives are left in place (no cascade, no block) and keep the
    dangling uploader_id.
    """
    if user_id == identity.id:
        raise InvalidOperationError("Cannot delete your own account")
    user = _get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User deleted: id=%s by user_id=%s", user_id, identity.id)


def get_profile(db: Session, identity: CurrentUser) -> ProfileRead:
    return ProfileRead.model_validate(_get_user(db, identity.id))


def update_profile(db: Session, identity: CurrentUser, data: ProfileUpdate) -> None:
    """
    Update the caller's name and email, and optionally the password.

    A new password requires the current one to verify against the stored hash.
    """
    user = _get_user(db, identity.id)
    if data.new_password:
        if not data.current_password or not verify_password(
            data.current_password, user.password_hash
        ):
            raise InvalidCredentialsError("Current password is incorrect")
        user.password_hash = hash_password(data.new_password)
    user.name = data.name
    user.email = data.email
    db.commit()
    logger.info(
        "Profile updated: id=%s password_changed=%s", identity.id, bool(data.new_password)
    )


def ensure_bootstrap_admin(
    db: Session,
    username: str,
    password: str,
    name: str,
    email: str,
) -> bool:
    """Create the first admin if no user holds this username. Returns True when created."""
    if _username_taken(db, username):
        return False
    create_user(
        db,
        UserCreate(username=username, name=name, email=email, password=password, role="admin"),
    )
    logger.info("Bootstrap admin %r created", username)
    return True
