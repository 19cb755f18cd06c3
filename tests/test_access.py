"""Unit tests for app.services.access: admin and owner-or-admin predicates."""

import unittest
from types import SimpleNamespace

from app.schemas.auth import CurrentUser
from app.services.access import can_mutate, is_admin


def _identity(user_id: int, role: str = "user") -> CurrentUser:
    return CurrentUser(id=user_id, username=f"user{user_id}", role=role)


class TestIsAdmin(unittest.TestCase):
    def test_admin_role(self) -> None:
        self.assertTrue(is_admin(_identity(1, "admin")))

    def test_user_role(self) -> None:
        self.assertFalse(is_admin(_identity(1, "user")))

    def test_role_is_case_sensitive(self) -> None:
        self.assertFalse(is_admin(_identity(1, "Admin")))


class TestCanMutate(unittest.TestCase):
    """Owner or admin may edit/delete; everyone else may not."""

    def setUp(self) -> None:
        self.archive = SimpleNamespace(uploader_id=7)

    def test_owner_can_mutate(self) -> None:
        self.assertTrue(can_mutate(_identity(7), self.archive))

    def test_other_user_cannot_mutate(self) -> None:
        self.assertFalse(can_mutate(_identity(8), self.archive))

    def test_admin_can_mutate_any_archive(self) -> None:
        self.assertTrue(can_mutate(_identity(99, "admin"), self.archive))


if __name__ == "__main__":
    unittest.main()
