"""Archive lifecycle: upload, list, get, edit, delete and download."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.core.errors import ForbiddenError, NotFoundError
from app.models import Archive, User
from app.models.base import utcnow
from app.schemas.archive import ArchiveCreate, ArchiveRead, ArchiveUpdate
from app.schemas.auth import CurrentUser
from app.services.access import can_mutate
from app.services.storage import ArchiveStorage, validate_upload

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

RECENT_ARCHIVES_LIMIT = 10


@dataclass(frozen=True)
class DownloadTarget:
    """Everything needed to stream a stored file back under its original name."""

    path: Path
    original_filename: str
    mime_type: str


def query_with_uploader(db: Session) -> Query:
    """Archive rows paired with their uploader's display name."""
    # Outer join: archives of deleted users stay visible with uploader_name = None.
    return (
        db.query(Archive, User.name.label("uploader_name"))
        .outerjoin(User, User.id == Archive.uploader_id)
    )


def to_archive_read(archive: Archive, uploader_name: str | None) -> ArchiveRead:
    """Project an Archive row to its response model with the joined uploader name."""
    read = ArchiveRead.model_validate(archive)
    read.uploader_name = uploader_name
    return read


def _get_row(db: Session, archive_id: int) -> Archive:
    archive = db.get(Archive, archive_id)
    if archive is None:
        raise NotFoundError("Archive not found")
    return archive


def upload_archive(
    db: Session,
    storage: ArchiveStorage,
    identity: CurrentUser,
    data: ArchiveCreate,
    content: bytes,
    original_filename: str,
    mime_type: str | None,
    settings: Settings,
) -> int:
    """
    Store a new archive and return its id.

    The file is checked against the allow-list and size limit before anything is
    written. Bytes are written first and the row inserted second; if the insert
    fails the written file is removed and the original error propagates.
    """
    validate_upload(
        original_filename,
        mime_type,
        len(content),
        max_size=settings.MAX_FILE_SIZE,
        allowed_extensions=settings.ALLOWED_EXTENSIONS,
    )
    stored_name = storage.save(content, original_filename)
    try:
        archive = Archive(
            title=data.title,
            description=data.description,
            category=data.category,
            filename=stored_name,
            original_filename=original_filename,
            file_size=len(content),
            mime_type=(mime_type or "").split(";")[0].strip().lower(),
            uploader_id=identity.id,
        )
        db.add(archive)
        db.commit()
    except Exception:
        db.rollback()
        try:
            storage.remove(stored_name)
        except OSError:
            logger.exception("Could not remove orphaned upload %s", stored_name)
        raise
    logger.info(
        "Archive uploaded: id=%s filename=%s size=%s uploader_id=%s",
        archive.id,
        stored_name,
        archive.file_size,
        identity.id,
    )
    return archive.id


def list_archives(
    db: Session,
    search: str | None = None,
    category: str | None = None,
    limit: int | None = None,
) -> list[ArchiveRead]:
    """
    All archives, newest first, each with its uploader's display name.

    search matches title, description or uploader name (case-insensitive
    substring); category is an exact match. Any authenticated user may list.
    """
    query = query_with_uploader(db)
    if search and search.strip():
        # autoescape: % and _ typed by the user match literally.
        term = search.strip()
        query = query.filter(
            or_(
                Archive.title.icontains(term, autoescape=True),
                Archive.description.icontains(term, autoescape=True),
                User.name.icontains(term, autoescape=True),
            )
        )
    if category:
        query = query.filter(Archive.category == category)
    query = query.order_by(Archive.created_at.desc(), Archive.id.desc())
    if limit is not None:
        query = query.limit(limit)
    return [to_archive_read(archive, name) for archive, name in query.all()]


def recent_archives(db: Session, limit: int = RECENT_ARCHIVES_LIMIT) -> list[ArchiveRead]:
    return list_archives(db, limit=limit)


def get_archive(db: Session, archive_id: int) -> ArchiveRead:
    row = query_with_uploader(db).filter(Archive.id == archive_id).first()
    if row is None:
        raise NotFoundError("Archive not found")
    archive, uploader_name = row
    return to_archive_read(archive, uploader_name)


def update_archive(
    db: Session,
    identity: CurrentUser,
    archive_id: int,
    data: ArchiveUpdate,
) -> None:
    """Edit title, description and category. Owner or admin only; the file is untouched."""
    archive = _get_row(db, archive_id)
    if not can_mutate(identity, archive):
        raise ForbiddenError("Permission denied")
    archive.title = data.title
    archive.description = data.description
    archive.category = data.category
    archive.updated_at = utcnow()
    db.commit()
    logger.info("Archive updated: id=%s by user_id=%s", archive_id, identity.id)


def delete_archive(
    db: Session,
    storage: ArchiveStorage,
    identity: CurrentUser,
    archive_id: int,
) -> None:
    """
    Remove an archive's file and then its row. Owner or admin only.

    A file that is already missing on disk does not block the row deletion.
    """
    archive = _get_row(db, archive_id)
    if not can_mutate(identity, archive):
        raise ForbiddenError("Permission denied")
    if not storage.remove(archive.filename):
        logger.warning(
            "Archive id=%s file %s was already missing on disk", archive_id, archive.filename
        )
    db.delete(archive)
    db.commit()
    logger.info("Archive deleted: id=%s by user_id=%s", archive_id, identity.id)


def open_download(db: Session, storage: ArchiveStorage, archive_id: int) -> DownloadTarget:
    """Resolve an archive to its stored file; NotFound when the row or the file is missing."""
    archive = _get_row(db, archive_id)
    if not storage.exists(archive.filename):
        raise NotFoundError("File not found")
    return DownloadTarget(
        path=storage.path_for(archive.filename),
        original_filename=archive.original_filename,
        mime_type=archive.mime_type,
    )
