from datetime import datetime
from typing import Protocol

from domain.model.user import NewUser, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Mutating methods validate against UserSchema before persisting and raise
    domain errors; read methods return None when nothing matches.
    """
    def create(self, draft: NewUser) -> User:
        """Persist a new user. Raise ValidationError or DuplicateError."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by (normalized) email."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID."""
        ...

    def update(self, user_id: str, patch: dict) -> User:
        """Apply a partial update. Raise ValidationError or NotFoundError.

        `patch` may carry username, role, is_active and profile. A profile dict
        is merged field by field into the stored profile; a Profile replaces it.
        """
        ...

    def update_last_login(self, user_id: str, when: datetime) -> bool:
        """Record a successful login. Return True if a user was updated."""
        ...

    def list_active(self) -> list[User]:
        """Return all users with is_active=True, newest first."""
        ...
