"""Schemas for admin user management and self-service profile."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field, field_validator

from app.core.config import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.core.security import USERNAME_MAX_LEN, USERNAME_MIN_LEN

Role = Literal["admin", "user"]
Status = Literal["active", "inactive"]


def _require_text(v: str) -> str:
    s = v.strip()
    if not s:
        raise ValueError("must not be blank")
    return s


NonBlankStr = Annotated[str, AfterValidator(_require_text)]


class UserRead(BaseModel):
    """User entry for admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str
    email: str
    role: str
    status: str
    created_at: datetime
    last_login: datetime | None = None


class UserCreate(BaseModel):
    """Admin-created account; status always starts as active."""

    username: NonBlankStr = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    name: NonBlankStr = Field(..., min_length=1, max_length=255)
    email: NonBlankStr = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: Role


class UserUpdate(BaseModel):
    """Full overwrite of an account's editable fields; the password is not touched."""

    username: NonBlankStr = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    name: NonBlankStr = Field(..., min_length=1, max_length=255)
    email: NonBlankStr = Field(..., min_length=1, max_length=255)
    role: Role
    status: Status


class UserCreatedResponse(BaseModel):
    message: str = "User created successfully"
    id: int


class ProfileRead(BaseModel):
    """The caller's own account."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str
    email: str
    role: str
    created_at: datetime
    last_login: datetime | None = None


class ProfileUpdate(BaseModel):
    """
    Self-service profile change. name and email are always required; a new
    password is only accepted together with the current one.
    """

    name: NonBlankStr = Field(..., min_length=1, max_length=255)
    email: NonBlankStr = Field(..., min_length=1, max_length=255)
    current_password: str | None = Field(
        default=None,
        max_length=PASSWORD_MAX_LEN,
        validation_alias=AliasChoices("current_password", "currentPassword"),
    )
    new_password: str | None = Field(
        default=None,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        validation_alias=AliasChoices("new_password", "newPassword"),
    )

    @field_validator("current_password", "new_password", mode="before")
    @classmethod
    def empty_as_none(cls, v: object) -> object:
        if isinstance(v, str) and v == "":
            return None
        return v
