"""JWT implementation of TokenIssuer (python-jose)."""

import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from domain.model.errors import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = 7


class JwtTokenIssuer:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = JWT_ALGORITHM,
        expires_in: timedelta = timedelta(days=JWT_EXPIRATION_DAYS),
    ):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: str) -> str:
        """Create JWT access token for user."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify JWT token and extract user_id.

        Raises:
            TokenExpiredError: signature is valid but exp has passed
            InvalidTokenError: bad signature, malformed token, or no subject
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            logger.debug(f"JWT expired: {e}")
            raise TokenExpiredError("Token has expired") from e
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError("Token is invalid") from e

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("Token has no subject")
        return user_id
