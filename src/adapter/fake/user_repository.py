"""In-memory implementation of UserRepository for testing."""

import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import DuplicateError, NotFoundError
from domain.model.schemas import clean_user
from domain.model.user import NewUser, User, merge_profile, normalize_email


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        # Stands in for the unique email index: check-and-insert is atomic
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def create(self, draft: NewUser) -> User:
        draft = clean_user(draft)

        with self._lock:
            if any(u.email == draft.email for u in self.store.values()):
                raise DuplicateError("User already exists")

            now = datetime.now(timezone.utc)
            user = User(
                id=uuid.uuid4().hex,
                username=draft.username,
                email=draft.email,
                created_at=now,
                updated_at=now,
                password_hash=draft.password_hash,
                profile=draft.profile,
                role=draft.role,
                is_active=draft.is_active,
            )
            self.store[user.id] = user
        return user

    def update(self, user_id: str, patch: dict) -> User:
        with self._lock:
            user = self.store.get(user_id)
            if not user:
                raise NotFoundError("User not found")

            profile = patch.get('profile', user.profile)
            if isinstance(profile, dict):
                profile = merge_profile(user.profile, profile)
            draft = clean_user(NewUser(
                username=patch.get('username', user.username),
                email=user.email,
                password_hash=user.password_hash,
                profile=profile,
                role=patch.get('role', user.role),
                is_active=patch.get('is_active', user.is_active),
            ))

            updated = replace(
                user,
                username=draft.username,
                profile=draft.profile,
                role=draft.role,
                is_active=draft.is_active,
                updated_at=datetime.now(timezone.utc),
            )
            self.store[user_id] = updated
        return updated

    def update_last_login(self, user_id: str, when: datetime) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        user.last_login = when
        user.updated_at = when
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        email = normalize_email(email)
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def list_active(self) -> list[User]:
        active = [u for u in self.store.values() if u.is_active]
        return sorted(active, key=lambda u: u.created_at, reverse=True)
