from typing import Protocol


class TokenIssuer(Protocol):
    """Issues and verifies signed, time-bounded bearer tokens."""
    def issue(self, user_id: str) -> str:
        """Return a token asserting `user_id` until the configured TTL elapses."""
        ...

    def verify(self, token: str) -> str:
        """Return the user ID. Raise TokenExpiredError or InvalidTokenError."""
        ...
