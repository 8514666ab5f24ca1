"""Tests for the user model helpers and validation schemas."""

import unittest
from datetime import datetime, timezone

from domain.model.errors import ValidationError
from domain.model.schemas import RegistrationSchema, clean_user, validate
from domain.model.user import NewUser, Profile, User, UserRole, full_name


class TestFullName(unittest.TestCase):

    def test_joins_first_and_last(self):
        self.assertEqual(full_name(Profile(first_name="Ada", last_name="Lovelace")), "Ada Lovelace")

    def test_skips_missing_parts(self):
        self.assertEqual(full_name(Profile(first_name="Ada")), "Ada")
        self.assertEqual(full_name(Profile(last_name=" Lovelace ")), "Lovelace")
        self.assertEqual(full_name(Profile(first_name="  ", last_name="")), "")

    def test_empty_profile(self):
        self.assertEqual(full_name(Profile()), "")
        self.assertEqual(full_name(None), "")

    def test_user_property(self):
        now = datetime.now(timezone.utc)
        user = User(id="1", username="u", email="u@x.com", created_at=now, updated_at=now,
                    profile=Profile(first_name="A", last_name="B"), role=UserRole.ADMIN)

        self.assertEqual(user.full_name, "A B")
        self.assertTrue(user.is_admin)


class TestRegistrationSchema(unittest.TestCase):

    def _validate(self, **overrides):
        data = {"username": "u1", "email": "u1@x.com", "password": "Password123"}
        data.update(overrides)
        return validate(RegistrationSchema, data)

    def test_valid_input(self):
        self.assertEqual(self._validate().username, "u1")

    def test_missing_uppercase(self):
        with self.assertRaises(ValidationError) as ctx:
            self._validate(password="password123")
        self.assertIn("uppercase", ctx.exception.errors["password"])

    def test_missing_lowercase(self):
        with self.assertRaises(ValidationError) as ctx:
            self._validate(password="PASSWORD123")
        self.assertIn("lowercase", ctx.exception.errors["password"])

    def test_context_overrides_min_length(self):
        with self.assertRaises(ValidationError):
            validate(
                RegistrationSchema,
                {"username": "u1", "email": "u1@x.com", "password": "Passw0rd"},
                context={"password_min_length": 10},
            )

    def test_username_too_long(self):
        with self.assertRaises(ValidationError) as ctx:
            self._validate(username="x" * 51)
        self.assertIn("username", ctx.exception.errors)

    def test_error_keys_are_dotted_paths(self):
        with self.assertRaises(ValidationError) as ctx:
            self._validate(profile={"first_name": "x" * 51})
        self.assertIn("profile.first_name", ctx.exception.errors)


class TestCleanUser(unittest.TestCase):

    def test_normalizes_fields(self):
        cleaned = clean_user(NewUser(
            username=" name ",
            email="Name@Example.com",
            password_hash="h",
            profile=Profile(first_name="", avatar="https://example.com/a.png"),
        ))

        self.assertEqual(cleaned.username, "name")
        self.assertEqual(cleaned.email, "name@example.com")
        self.assertIsNone(cleaned.profile.first_name)
        self.assertEqual(cleaned.profile.avatar, "https://example.com/a.png")

    def test_rejects_bad_avatar(self):
        with self.assertRaises(ValidationError) as ctx:
            clean_user(NewUser(username="n", email="n@example.com", password_hash="h",
                               profile=Profile(avatar="not a url")))
        self.assertIn("profile.avatar", ctx.exception.errors)


if __name__ == '__main__':
    unittest.main()
