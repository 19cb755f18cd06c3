"""Pydantic request/response schemas."""

from app.schemas.archive import (
    ArchiveCreate,
    ArchiveCreatedResponse,
    ArchiveRead,
    ArchiveUpdate,
    MessageResponse,
)
from app.schemas.auth import CurrentUser, LoginRequest, LoginResponse, PublicUser
from app.schemas.health import HealthResponse
from app.schemas.report import (
    ArchiveReport,
    CategoryCounts,
    CategoryStat,
    DashboardStats,
    UploaderStat,
)
from app.schemas.user import (
    ProfileRead,
    ProfileUpdate,
    UserCreate,
    UserCreatedResponse,
    UserRead,
    UserUpdate,
)

__all__ = [
    "ArchiveCreate",
    "ArchiveCreatedResponse",
    "ArchiveRead",
    "ArchiveReport",
    "ArchiveUpdate",
    "CategoryCounts",
    "CategoryStat",
    "CurrentUser",
    "DashboardStats",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ProfileRead",
    "ProfileUpdate",
    "PublicUser",
    "UploaderStat",
    "UserCreate",
    "UserCreatedResponse",
    "UserRead",
    "UserUpdate",
]
