"""bcrypt password hashing.

Each hash gets a fresh salt, so hashing the same password twice yields two
different digests that both verify. The cost factor is fixed per instance.
"""

import logging
import secrets

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt accepts log2 rounds in [4, 31]; 12 (2^12 iterations) keeps login near 200ms
BCRYPT_ROUNDS = 12
MIN_ROUNDS = 4
MAX_ROUNDS = 31


class PasswordHasher:
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
            raise ValueError(f"bcrypt rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}, got {rounds}")
        self.rounds = rounds
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        """Hash password using bcrypt.

        Args:
            password: Plain text password (at most 72 bytes)

        Returns:
            Bcrypt hashed password as string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def verify(self, password: str, hashed: str | None) -> bool:
        """Verify password against hash.

        Returns False for a wrong password and for a missing or malformed
        digest; never raises.
        """
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
        except ValueError as e:
            logger.warning("Password verification failed on malformed hash", extra={"error": str(e)})
            return False

    def dummy_verify(self, password: str) -> None:
        """Spend one verification's worth of work against a throwaway hash.

        Used when the account does not exist, so that response time does not
        reveal whether an email is registered.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash(secrets.token_urlsafe(16))
        self.verify(password, self._dummy_hash)
