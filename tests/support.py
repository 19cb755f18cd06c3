"""Shared test scaffolding: isolated in-memory database, temporary upload dir, user/archive builders."""

import tempfile
import unittest
from datetime import datetime
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.security import create_access_token, hash_password
from app.models import Archive, Base, User
from app.schemas.archive import ArchiveCreate
from app.schemas.auth import CurrentUser
from app.services.archives import upload_archive
from app.services.storage import ArchiveStorage

DEFAULT_PASSWORD = "secret123"
PDF_BYTES = b"%PDF-1.4\n% test document\n%%EOF\n"


class ServiceTestCase(unittest.TestCase):
    """
    Each test gets its own SQLite database and upload directory, injected into
    services explicitly. bcrypt cost is lowered to keep hashing fast.
    """

    def setUp(self) -> None:
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        self.addCleanup(self.engine.dispose)
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.db = self.SessionLocal()
        self.addCleanup(self.db.close)

        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.storage = ArchiveStorage(tmp.name)
        self.settings = Settings()

    def add_user(
        self,
        username: str,
        role: str = "user",
        password: str = DEFAULT_PASSWORD,
        status: str = "active",
        name: str | None = None,
    ) -> User:
        user = User(
            username=username,
            name=name or username.capitalize(),
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            role=role,
            status=status,
        )
        self.db.add(user)
        self.db.commit()
        return user

    @staticmethod
    def identity(user: User) -> CurrentUser:
        return CurrentUser(id=user.id, username=user.username, role=user.role)

    @staticmethod
    def token_for(user: User) -> str:
        return create_access_token(user_id=user.id, username=user.username, role=user.role)

    def auth_headers(self, user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(user)}"}

    def add_archive(
        self,
        uploader: User,
        title: str = "Uji berkala B 1234 XY",
        description: str = "Hasil uji berkala kendaraan",
        category: str = "kendaraan",
        content: bytes = PDF_BYTES,
        original_filename: str = "hasil-uji.pdf",
        mime_type: str = "application/pdf",
        created_at: datetime | None = None,
    ) -> Archive:
        """Upload through the service so row and file are created together."""
        archive_id = upload_archive(
            self.db,
            self.storage,
            self.identity(uploader),
            ArchiveCreate(title=title, description=description, category=category),
            content,
            original_filename=original_filename,
            mime_type=mime_type,
            settings=self.settings,
        )
        archive = self.db.get(Archive, archive_id)
        if created_at is not None:
            archive.created_at = created_at
            self.db.commit()
        return archive

    def stored_files(self) -> list[str]:
        if not self.storage.root.is_dir():
            return []
        return sorted(p.name for p in self.storage.root.iterdir())
