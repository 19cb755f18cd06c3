"""SQLAlchemy ORM models."""

from app.models.archive import Archive
from app.models.base import Base
from app.models.user import User

__all__ = ["Archive", "Base", "User"]
