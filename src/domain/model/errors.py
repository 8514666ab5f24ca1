"""Domain-level exceptions.

Services raise these errors to express business rule violations.
The API layer maps them to HTTP status codes in one place
(api/exception_handlers.py).
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""


class ValidationError(DomainError):
    """Input violates a schema or business validation rule.

    `errors` maps field paths (e.g. "profile.avatar") to messages.
    """

    def __init__(self, message: str = "Validation Error", errors: dict[str, str] | None = None):
        self.errors = errors or {}
        super().__init__(message)


# ── authentication ───────────────────────────────────────


class InvalidCredentialsError(DomainError):
    """Unknown email or wrong password (deliberately indistinguishable)."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AccountDeactivatedError(DomainError):
    """Account exists but is_active is False."""

    def __init__(self, message: str = "Account deactivated"):
        super().__init__(message)


class UnauthorizedError(DomainError):
    """Request is not authenticated."""


class TokenError(DomainError):
    """Token could not be verified."""


class InvalidTokenError(TokenError):
    """Bad signature, malformed structure, or missing subject."""


class TokenExpiredError(TokenError):
    """Token was valid but its expiration instant has passed."""
