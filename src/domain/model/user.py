from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    USER = 'user'
    ADMIN = 'admin'


@dataclass
class Profile:
    """Optional display details attached to a user."""
    first_name: str | None = None
    last_name: str | None = None
    avatar: str | None = None


PROFILE_FIELDS = ('first_name', 'last_name', 'avatar')


def merge_profile(profile: Profile | None, changes: dict) -> Profile:
    """Overlay `changes` on `profile`. Keys outside PROFILE_FIELDS are ignored."""
    merged = {field: getattr(profile, field, None) for field in PROFILE_FIELDS}
    merged.update({k: v for k, v in changes.items() if k in PROFILE_FIELDS})
    return Profile(**merged)


def full_name(profile: Profile | None) -> str:
    """Join first and last name, skipping empty parts. Never stored."""
    if profile is None:
        return ''
    parts = [p.strip() for p in (profile.first_name, profile.last_name) if p and p.strip()]
    return ' '.join(parts)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class NewUser:
    """Draft of a user before the store assigns id and timestamps."""
    username: str
    email: str
    password_hash: str
    profile: Profile = field(default_factory=Profile)
    role: UserRole = UserRole.USER
    is_active: bool = True


@dataclass
class User:
    """Domain model representing a registered user."""
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
    password_hash: str | None = None
    profile: Profile = field(default_factory=Profile)
    role: UserRole = UserRole.USER
    is_active: bool = True
    last_login: datetime | None = None

    @property
    def full_name(self) -> str:
        return full_name(self.profile)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
