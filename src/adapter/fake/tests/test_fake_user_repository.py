"""Tests for FakeUserRepository, the in-memory store used by service and route tests."""

import unittest
from datetime import datetime, timezone

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError, NotFoundError, ValidationError
from domain.model.user import NewUser, Profile, UserRole


def _draft(**kwargs) -> NewUser:
    defaults = {
        "username": "tester",
        "email": "tester@example.com",
        "password_hash": "$2b$04$hash",
    }
    defaults.update(kwargs)
    return NewUser(**defaults)


class TestFakeUserRepository(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_create_assigns_id_and_timestamps(self):
        user = self.repo.create(_draft())

        self.assertTrue(user.id)
        self.assertIsNotNone(user.created_at)
        self.assertEqual(user.created_at, user.updated_at)
        self.assertIsNone(user.last_login)

    def test_create_lowercases_email(self):
        user = self.repo.create(_draft(email="Mixed@Example.COM"))

        self.assertEqual(user.email, "mixed@example.com")
        self.assertIs(self.repo.get_by_email("MIXED@example.com"), user)

    def test_duplicate_email_rejected(self):
        self.repo.create(_draft())

        with self.assertRaises(DuplicateError):
            self.repo.create(_draft(username="other", email="TESTER@example.com"))

    def test_usernames_need_not_be_unique(self):
        self.repo.create(_draft(email="a@example.com"))
        self.repo.create(_draft(email="b@example.com"))

        self.assertEqual(len(self.repo.store), 2)

    def test_create_rejects_invalid_record(self):
        with self.assertRaises(ValidationError):
            self.repo.create(_draft(username="x" * 51))
        with self.assertRaises(ValidationError):
            self.repo.create(_draft(password_hash=""))

    def test_update_role_and_activity(self):
        user = self.repo.create(_draft())

        updated = self.repo.update(user.id, {"role": UserRole.ADMIN, "is_active": False})

        self.assertTrue(updated.is_admin)
        self.assertFalse(updated.is_active)
        self.assertEqual(updated.email, user.email)
        self.assertEqual(updated.password_hash, user.password_hash)

    def test_update_accepts_profile_dict(self):
        user = self.repo.create(_draft())

        updated = self.repo.update(user.id, {"profile": {"first_name": "Ada"}})

        self.assertEqual(updated.profile, Profile(first_name="Ada"))

    def test_update_invalid_role_rejected(self):
        user = self.repo.create(_draft())

        with self.assertRaises(ValidationError):
            self.repo.update(user.id, {"role": "superuser"})

    def test_update_missing_user(self):
        with self.assertRaises(NotFoundError):
            self.repo.update("missing", {"is_active": False})

    def test_update_last_login(self):
        user = self.repo.create(_draft())
        when = datetime.now(timezone.utc)

        self.assertTrue(self.repo.update_last_login(user.id, when))
        self.assertEqual(self.repo.get_by_id(user.id).last_login, when)
        self.assertFalse(self.repo.update_last_login("missing", when))

    def test_list_active_excludes_inactive(self):
        keep = self.repo.create(_draft(email="keep@example.com"))
        drop = self.repo.create(_draft(email="drop@example.com", is_active=False))

        ids = [u.id for u in self.repo.list_active()]

        self.assertIn(keep.id, ids)
        self.assertNotIn(drop.id, ids)


if __name__ == '__main__':
    unittest.main()
