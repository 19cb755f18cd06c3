"""Pydantic schemas for archive metadata (create, edit, read)."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Category = Literal["kendaraan", "staf", "inventaris"]

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 10_000


class ArchiveFields(BaseModel):
    """Editable metadata shared by upload and edit; all fields required and non-blank."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    category: Category

    @field_validator("title", "description")
    @classmethod
    def strip_and_require(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("must not be blank")
        return s


class ArchiveCreate(ArchiveFields):
    """Metadata submitted alongside an uploaded file."""


class ArchiveUpdate(ArchiveFields):
    """Metadata edit; the stored file is never replaced through this path."""


class ArchiveRead(BaseModel):
    """Archive row as returned by the API, annotated with the uploader's display name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    category: str
    filename: str
    original_filename: str
    file_size: int
    mime_type: str
    uploader_id: int
    uploader_name: str | None = Field(
        default=None,
        description="Display name of the uploader; null when the uploader account was deleted.",
    )
    created_at: datetime
    updated_at: datetime | None = None


class ArchiveCreatedResponse(BaseModel):
    """Response after a successful upload."""

    message: str = "Archive uploaded successfully"
    id: int


class MessageResponse(BaseModel):
    """Plain acknowledgement for update/delete operations."""

    message: str
