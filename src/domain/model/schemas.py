"""Declarative schemas checked at the store and service boundary.

Domain objects stay plain dataclasses; these pydantic models describe what a
valid record looks like. `validate()` turns a pydantic failure into the
domain ValidationError with field-level messages.
"""

import re
from dataclasses import asdict
from datetime import datetime
from typing import Annotated, TypeVar

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    HttpUrl,
    StringConstraints,
    ValidationInfo,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from domain.model.errors import ValidationError
from domain.model.task import TaskPriority, TaskStatus
from domain.model.user import NewUser, Profile, UserRole, normalize_email

DEFAULT_PASSWORD_MIN_LENGTH = 8
# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_PASSWORD_BYTES = 72

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]
TaskTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
TaskDescription = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


class ProfileSchema(BaseModel):
    first_name: Name | None = None
    last_name: Name | None = None
    avatar: HttpUrl | None = None


class UserSchema(BaseModel):
    """Shape of a persisted user record."""
    username: Username
    email: EmailStr
    password_hash: str = Field(..., min_length=1)
    profile: ProfileSchema = Field(default_factory=ProfileSchema)
    role: UserRole = UserRole.USER
    is_active: bool = True


class RegistrationSchema(BaseModel):
    """Plaintext registration input, checked before the password is hashed."""
    username: Username
    email: EmailStr
    password: str
    profile: ProfileSchema | None = None

    @field_validator('password')
    @classmethod
    def _password_strength(cls, value: str, info: ValidationInfo) -> str:
        min_length = (info.context or {}).get('password_min_length', DEFAULT_PASSWORD_MIN_LENGTH)
        if len(value) < min_length:
            raise ValueError(f"Password must be at least {min_length} characters")
        if len(value.encode('utf-8')) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        if not re.search(r"[A-Z]", value):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", value):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"[0-9]", value):
            raise ValueError("Password must contain at least one number")
        return value


class TaskSchema(BaseModel):
    title: TaskTitle
    owner_id: str = Field(..., min_length=1)
    description: TaskDescription | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None


S = TypeVar('S', bound=BaseModel)


def validate(schema: type[S], data: dict, context: dict | None = None) -> S:
    """Validate `data` against `schema`.

    Raises:
        ValidationError: with `errors` keyed by dotted field path
    """
    try:
        return schema.model_validate(data, context=context)
    except PydanticValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            path = '.'.join(str(part) for part in err['loc']) or '__root__'
            errors.setdefault(path, err['msg'])
        raise ValidationError("Validation Error", errors) from e


# ── conversions ──────────────────────────────────────────


def profile_from_schema(schema: ProfileSchema | None) -> Profile:
    if schema is None:
        return Profile()
    return Profile(
        first_name=schema.first_name or None,
        last_name=schema.last_name or None,
        avatar=str(schema.avatar) if schema.avatar else None,
    )


def clean_user(draft: NewUser) -> NewUser:
    """Validate a user draft against UserSchema and return the normalized draft."""
    schema = validate(UserSchema, asdict(draft))
    return NewUser(
        username=schema.username,
        email=normalize_email(schema.email),
        password_hash=schema.password_hash,
        profile=profile_from_schema(schema.profile),
        role=schema.role,
        is_active=schema.is_active,
    )
