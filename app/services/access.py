"""Permission predicates for archive mutation and admin-only operations."""

from typing import Protocol

from app.models.user import ROLE_ADMIN
from app.schemas.auth import CurrentUser


class _Owned(Protocol):
    uploader_id: int


def is_admin(identity: CurrentUser) -> bool:
    """True when the caller holds the admin role."""
    return identity.role == ROLE_ADMIN


def can_mutate(identity: CurrentUser, archive: _Owned) -> bool:
    """Edit and delete are allowed for admins and for the archive's uploader. Reads are never restricted."""
    return is_admin(identity) or identity.id == archive.uploader_id
