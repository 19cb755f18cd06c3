"""On-disk storage for archive files: allow-list checks, unique naming, save and remove."""

import logging
import mimetypes
import random
import time
from collections.abc import Iterable
from pathlib import Path, PurePath

from app.core.config import get_settings
from app.core.errors import InvalidInputError

logger = logging.getLogger(__name__)

# Declared MIME types accepted for each known extension.
MIME_TYPES_BY_EXTENSION: dict[str, frozenset[str]] = {
    "pdf": frozenset({"application/pdf"}),
    "doc": frozenset({"application/msword"}),
    "docx": frozenset(
        {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
    ),
    "jpg": frozenset({"image/jpeg", "image/pjpeg"}),
    "jpeg": frozenset({"image/jpeg", "image/pjpeg"}),
    "png": frozenset({"image/png"}),
    "xls": frozenset({"application/vnd.ms-excel"}),
    "xlsx": frozenset(
        {"application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"}
    ),
}


def file_extension(filename: str) -> str:
    """Lowercase extension without the dot ('' when there is none)."""
    return PurePath(filename).suffix.lower().lstrip(".")


def format_file_size(size: int) -> str:
    """Human-readable size: 0 Bytes, 512 Bytes, 1.5 KB, 10 MB."""
    if size <= 0:
        return "0 Bytes"
    units = ("Bytes", "KB", "MB", "GB")
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {units[unit]}"


def allowed_mime_types(allowed_extensions: Iterable[str]) -> frozenset[str]:
    """Union of MIME types registered for the allowed extensions."""
    mimes: set[str] = set()
    for ext in allowed_extensions:
        known = MIME_TYPES_BY_EXTENSION.get(ext)
        if known:
            mimes.update(known)
            continue
        guessed, _ = mimetypes.guess_type(f"file.{ext}")
        if guessed:
            mimes.add(guessed)
    return frozenset(mimes)


def validate_upload(
    original_filename: str,
    mime_type: str | None,
    size: int,
    *,
    max_size: int,
    allowed_extensions: Iterable[str],
) -> None:
    """
    Reject a file before anything is written.

    Both the extension and the declared MIME type must be on the allow-list,
    and the size must be between 1 byte and max_size.
    """
    allowed = tuple(allowed_extensions)
    if not original_filename or not original_filename.strip():
        raise InvalidInputError("File is required", field="file")
    ext = file_extension(original_filename)
    mime = (mime_type or "").split(";")[0].strip().lower()
    if ext not in allowed or mime not in allowed_mime_types(allowed):
        raise InvalidInputError(
            f"File type not allowed (allowed: {', '.join(allowed)})", field="file"
        )
    if size <= 0:
        raise InvalidInputError("File is empty", field="file")
    if size > max_size:
        raise InvalidInputError(
            f"File size too large (max {format_file_size(max_size)})", field="file"
        )


class ArchiveStorage:
    """
    Directory of uploaded files, addressed only by generated filenames.

    A stored filename is the link between an archive row and its bytes; there is
    no transaction spanning both, so callers remove files on failed inserts.
    """

    def __init__(self, upload_dir: str | Path) -> None:
        self.root = Path(upload_dir).resolve()

    def ensure_dir(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def generate_filename(original_filename: str) -> str:
        """<epoch millis>-<9 random digits><.ext>, e.g. 1729260000000-123456789.pdf"""
        ext = file_extension(original_filename)
        suffix = random.SystemRandom().randint(0, 999_999_999)
        name = f"{time.time_ns() // 1_000_000}-{suffix:09d}"
        return f"{name}.{ext}" if ext else name

    def path_for(self, filename: str) -> Path:
        """Absolute path of a stored file; names that escape the upload dir are rejected."""
        if not filename or PurePath(filename).name != filename:
            raise ValueError(f"Invalid stored filename: {filename!r}")
        path = (self.root / filename).resolve()
        if path.parent != self.root:
            raise ValueError(f"Invalid stored filename: {filename!r}")
        return path

    def save(self, content: bytes, original_filename: str) -> str:
        """Write content under a fresh unique name and return that name."""
        self.ensure_dir()
        while True:
            filename = self.generate_filename(original_filename)
            try:
                with open(self.path_for(filename), "xb") as fh:
                    fh.write(content)
            except FileExistsError:
                continue
            logger.debug("Stored file %s (%s bytes)", filename, len(content))
            return filename

    def exists(self, filename: str) -> bool:
        try:
            return self.path_for(filename).is_file()
        except ValueError:
            return False

    def remove(self, filename: str) -> bool:
        """Delete a stored file. Returns False when it was already gone."""
        path = self.path_for(filename)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.debug("Removed stored file %s", filename)
        return True


def get_storage() -> ArchiveStorage:
    """Dependency returning storage rooted at the configured UPLOAD_DIR."""
    return ArchiveStorage(get_settings().UPLOAD_DIR)
