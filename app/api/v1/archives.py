"""Archive endpoints: multipart upload, list/search, get, edit, delete and download."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from app.api.errors import validate_model
from app.api.v1.auth import get_current_user
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import InvalidInputError
from app.schemas.archive import (
    ArchiveCreate,
    ArchiveCreatedResponse,
    ArchiveRead,
    ArchiveUpdate,
    Category,
    MessageResponse,
)
from app.schemas.auth import CurrentUser
from app.services import archives as archive_service
from app.services.storage import ArchiveStorage, get_storage

router = APIRouter()


@router.get("", response_model=list[ArchiveRead])
def list_archives(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    q: Annotated[
        str | None,
        Query(max_length=255, description="Search in title, description and uploader name"),
    ] = None,
    category: Annotated[Category | None, Query(description="Exact category")] = None,
) -> list[ArchiveRead]:
    """List all archives, newest first. Every authenticated user can read every archive."""
    return archive_service.list_archives(db, search=q, category=category)


@router.post("", response_model=ArchiveCreatedResponse, status_code=status.HTTP_201_CREATED)
def upload_archive(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[ArchiveStorage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_settings)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
    title: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    category: Annotated[str, Form()] = "",
    file: Annotated[UploadFile | None, File()] = None,
) -> ArchiveCreatedResponse:
    """
    Upload a document as `multipart/form-data` with fields `title`, `description`,
    `category` (kendaraan, staf or inventaris) and `file`.

    Allowed types and the size limit come from ALLOWED_EXTENSIONS and MAX_FILE_SIZE.
    """
    data = validate_model(
        ArchiveCreate, title=title, description=description, category=category
    )
    if file is None or not file.filename:
        raise InvalidInputError("File is required", field="file")
    # Read one byte past the limit so oversize files are detected without reading them whole.
    content = file.file.read(settings.MAX_FILE_SIZE + 1)
    archive_id = archive_service.upload_archive(
        db,
        storage,
        user,
        data,
        content,
        original_filename=file.filename,
        mime_type=file.content_type,
        settings=settings,
    )
    return ArchiveCreatedResponse(id=archive_id)


@router.get("/{archive_id}", response_model=ArchiveRead)
def get_archive(
    archive_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ArchiveRead:
    return archive_service.get_archive(db, archive_id)


@router.put("/{archive_id}", response_model=MessageResponse)
def update_archive(
    archive_id: int,
    body: ArchiveUpdate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Edit title, description and category. Only the uploader or an admin may edit."""
    archive_service.update_archive(db, user, archive_id, body)
    return MessageResponse(message="Archive updated successfully")


@router.delete("/{archive_id}", response_model=MessageResponse)
def delete_archive(
    archive_id: int,
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[ArchiveStorage, Depends(get_storage)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Delete the archive and its stored file. Only the uploader or an admin may delete."""
    archive_service.delete_archive(db, storage, user, archive_id)
    return MessageResponse(message="Archive deleted successfully")


@router.get("/{archive_id}/download", response_class=FileResponse)
def download_archive(
    archive_id: int,
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[ArchiveStorage, Depends(get_storage)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> FileResponse:
    """Stream the stored file as an attachment under its original filename."""
    target = archive_service.open_download(db, storage, archive_id)
    return FileResponse(
        target.path,
        media_type=target.mime_type,
        filename=target.original_filename,
    )
