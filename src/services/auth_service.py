"""Auth service: registration, login, and token-derived identity.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API layer maps to HTTP status codes.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from domain.model.errors import (
    AccountDeactivatedError,
    DuplicateError,
    InvalidCredentialsError,
    TokenError,
    UnauthorizedError,
)
from domain.model.schemas import (
    DEFAULT_PASSWORD_MIN_LENGTH,
    RegistrationSchema,
    profile_from_schema,
    validate,
)
from domain.model.user import PROFILE_FIELDS, NewUser, User, normalize_email
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository
from services.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid token."
ACCOUNT_DEACTIVATED_MESSAGE = "Account deactivated."


@dataclass
class AuthResult:
    user: User
    token: str


def register(
    repo: UserRepository,
    hasher: PasswordHasher,
    tokens: TokenIssuer,
    username: str,
    email: str,
    password: str,
    profile: dict | None = None,
    password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
) -> AuthResult:
    """Register a new user and issue a token.

    Raises:
        ValidationError: malformed email, weak password, missing fields, bad avatar URL
        DuplicateError: email already registered
    """
    data = validate(
        RegistrationSchema,
        {'username': username, 'email': normalize_email(email), 'password': password, 'profile': profile},
        context={'password_min_length': password_min_length},
    )
    email = normalize_email(data.email)

    if repo.get_by_email(email):
        raise DuplicateError("User already exists")

    # The store's unique constraint is authoritative if a concurrent request wins the race
    user = repo.create(NewUser(
        username=data.username,
        email=email,
        password_hash=hasher.hash(data.password),
        profile=profile_from_schema(data.profile),
    ))

    logger.info("User registered", extra={"userId": user.id, "email": user.email})
    return AuthResult(user=user, token=tokens.issue(user.id))


def authenticate(
    repo: UserRepository,
    hasher: PasswordHasher,
    tokens: TokenIssuer,
    email: str,
    password: str,
) -> AuthResult:
    """Authenticate a user by email and password.

    Unknown email and wrong password raise the same error.

    Raises:
        InvalidCredentialsError: no such email, or password mismatch
        AccountDeactivatedError: the account exists but is deactivated
    """
    user = repo.get_by_email(email)
    if not user:
        hasher.dummy_verify(password)
        logger.info("Login failed", extra={"reason": "unknown_email"})
        raise InvalidCredentialsError()

    if not user.is_active:
        logger.info("Login refused for deactivated account", extra={"userId": user.id})
        raise AccountDeactivatedError()

    if not hasher.verify(password, user.password_hash):
        logger.info("Login failed", extra={"userId": user.id, "reason": "password_mismatch"})
        raise InvalidCredentialsError()

    # Login succeeds even if the timestamp write fails
    now = datetime.now(timezone.utc)
    if repo.update_last_login(user.id, now):
        user.last_login = now

    logger.info("User logged in", extra={"userId": user.id})
    return AuthResult(user=user, token=tokens.issue(user.id))


def get_current_user(repo: UserRepository, tokens: TokenIssuer, token: str) -> User:
    """Resolve the user a token refers to.

    Raises:
        UnauthorizedError: invalid/expired token, vanished user, or deactivated user
    """
    try:
        user_id = tokens.verify(token)
    except TokenError as e:
        logger.debug("Token rejected", extra={"reason": type(e).__name__})
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from e

    user = repo.get_by_id(user_id)
    if not user:
        logger.info("Token refers to a missing user", extra={"userId": user_id})
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE)

    if not user.is_active:
        raise UnauthorizedError(ACCOUNT_DEACTIVATED_MESSAGE)

    return user


def update_profile(repo: UserRepository, user: User, profile_patch: dict) -> User:
    """Merge the given profile fields into the user's stored profile.

    Only keys present in `profile_patch` change; a value of None clears a field.
    The store merges against its current record, so concurrent updates of
    different fields do not overwrite each other.

    Raises:
        ValidationError: a field (e.g. avatar URL) is malformed
        NotFoundError: the user no longer exists
    """
    changes = {k: v for k, v in profile_patch.items() if k in PROFILE_FIELDS}
    updated = repo.update(user.id, {'profile': changes})

    logger.info("Profile updated", extra={"userId": user.id, "fields": sorted(changes)})
    return updated


def list_active_users(repo: UserRepository) -> list[User]:
    return repo.list_active()
