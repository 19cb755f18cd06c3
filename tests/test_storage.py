"""Unit tests for app.services.storage: allow-list, size limit, naming, save/remove."""

import re
import tempfile
import unittest
from pathlib import Path

from app.core.config import DEFAULT_ALLOWED_EXTENSIONS
from app.core.errors import InvalidInputError
from app.services.storage import (
    ArchiveStorage,
    allowed_mime_types,
    file_extension,
    format_file_size,
    validate_upload,
)

MAX = 10 * 1024 * 1024


def _validate(name: str, mime: str | None, size: int = 100, max_size: int = MAX) -> None:
    validate_upload(
        name, mime, size, max_size=max_size, allowed_extensions=DEFAULT_ALLOWED_EXTENSIONS
    )


class TestValidateUpload(unittest.TestCase):
    def test_allowed_types_accepted(self) -> None:
        cases = [
            ("report.pdf", "application/pdf"),
            ("scan.JPG", "image/jpeg"),
            ("photo.jpeg", "image/jpeg"),
            ("logo.png", "image/png"),
            ("memo.doc", "application/msword"),
            (
                "memo.docx",
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            ),
            ("stock.xls", "application/vnd.ms-excel"),
            (
                "stock.xlsx",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            ),
            ("report.pdf", "application/pdf; charset=binary"),
        ]
        for name, mime in cases:
            with self.subTest(name=name, mime=mime):
                _validate(name, mime)

    def test_executable_rejected(self) -> None:
        with self.assertRaises(InvalidInputError) as ctx:
            _validate("setup.exe", "application/x-msdownload")
        self.assertEqual(ctx.exception.field, "file")

    def test_allowed_extension_with_disallowed_mime_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            _validate("evil.pdf", "application/x-msdownload")

    def test_disallowed_extension_with_allowed_mime_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            _validate("evil.exe", "application/pdf")

    def test_missing_mime_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            _validate("report.pdf", None)

    def test_no_extension_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            _validate("README", "application/pdf")

    def test_empty_file_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            _validate("report.pdf", "application/pdf", size=0)

    def test_size_limit_is_inclusive(self) -> None:
        _validate("report.pdf", "application/pdf", size=MAX)
        with self.assertRaises(InvalidInputError) as ctx:
            _validate("report.pdf", "application/pdf", size=MAX + 1)
        self.assertIn("10 MB", ctx.exception.message)

    def test_configured_extensions_narrow_the_list(self) -> None:
        with self.assertRaises(InvalidInputError):
            validate_upload(
                "scan.png", "image/png", 10, max_size=MAX, allowed_extensions=("pdf",)
            )

    def test_unknown_configured_extension_uses_guessed_mime(self) -> None:
        self.assertIn("text/plain", allowed_mime_types(("txt",)))


class TestHelpers(unittest.TestCase):
    def test_file_extension(self) -> None:
        self.assertEqual(file_extension("A.Report.PDF"), "pdf")
        self.assertEqual(file_extension("noext"), "")

    def test_format_file_size(self) -> None:
        self.assertEqual(format_file_size(0), "0 Bytes")
        self.assertEqual(format_file_size(512), "512 Bytes")
        self.assertEqual(format_file_size(1536), "1.5 KB")
        self.assertEqual(format_file_size(10 * 1024 * 1024), "10 MB")


class TestArchiveStorage(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.storage = ArchiveStorage(Path(tmp.name) / "uploads")

    def test_generated_names_keep_extension_and_are_unique(self) -> None:
        names = {ArchiveStorage.generate_filename("Laporan Final.PDF") for _ in range(200)}
        self.assertEqual(len(names), 200)
        for name in names:
            self.assertRegex(name, re.compile(r"^\d{13}-\d{9}\.pdf$"))

    def test_save_creates_dir_and_writes_bytes(self) -> None:
        name = self.storage.save(b"hello", "note.pdf")
        self.assertTrue(self.storage.exists(name))
        self.assertEqual(self.storage.path_for(name).read_bytes(), b"hello")
        self.assertNotEqual(name, "note.pdf")

    def test_remove_tolerates_missing_file(self) -> None:
        name = self.storage.save(b"x", "a.pdf")
        self.assertTrue(self.storage.remove(name))
        self.assertFalse(self.storage.exists(name))
        self.assertFalse(self.storage.remove(name))

    def test_path_traversal_rejected(self) -> None:
        for bad in ("../secret.pdf", "sub/file.pdf", "..", "", "/etc/passwd"):
            with self.subTest(bad=bad):
                with self.assertRaises(ValueError):
                    self.storage.path_for(bad)
                self.assertFalse(self.storage.exists(bad))


if __name__ == "__main__":
    unittest.main()
