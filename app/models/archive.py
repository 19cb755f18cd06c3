"""ORM model for archived documents (metadata row; bytes live in the upload directory)."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.models.base import Base, utcnow

CATEGORY_KENDARAAN = "kendaraan"
CATEGORY_STAF = "staf"
CATEGORY_INVENTARIS = "inventaris"
CATEGORIES = (CATEGORY_KENDARAAN, CATEGORY_STAF, CATEGORY_INVENTARIS)

# Display labels used in exported reports.
CATEGORY_LABELS = {
    CATEGORY_KENDARAAN: "Data Kendaraan & Riwayat Uji",
    CATEGORY_STAF: "Data Staf/Pegawai",
    CATEGORY_INVENTARIS: "Data Inventaris",
}


class Archive(Base):
    """
    One uploaded document.

    filename is the generated on-disk name (unique); original_filename is only
    shown to users. uploader_id references users.id without a foreign key so
    deleting a user leaves their archives in place.
    """

    __tablename__ = "archives"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(32), nullable=False, index=True)
    filename = Column(String(255), nullable=False, unique=True)
    original_filename = Column(String(512), nullable=False)
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String(255), nullable=False)
    uploader_id = Column(Integer, nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)
