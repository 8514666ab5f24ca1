"""Application settings loaded from environment variables.

A `.env` file is honored via python-dotenv. Settings are read once and cached;
a missing JWT_SECRET_KEY is fatal when the settings are first loaded.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_days: int = 7
    bcrypt_rounds: int = 12
    password_min_length: int = 8
    mongo_url: str | None = None
    database_name: str = "tasktrack"
    cors_origins: str = "*"
    log_level: str = "INFO"
    port: int = 8000


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings() -> Settings:
    """Build Settings from the current environment.

    Raises:
        ValueError: JWT_SECRET_KEY is missing or a numeric variable is malformed
    """
    load_dotenv()

    secret = os.getenv("JWT_SECRET_KEY")
    if not secret:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    return Settings(
        jwt_secret_key=secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expiration_days=_int_env("JWT_EXPIRATION_DAYS", 7),
        bcrypt_rounds=_int_env("BCRYPT_ROUNDS", 12),
        password_min_length=_int_env("PASSWORD_MIN_LENGTH", 8),
        mongo_url=os.getenv("MONGO_URL") or None,
        database_name=os.getenv("MONGODB_DATABASE", "tasktrack"),
        cors_origins=os.getenv("CORS_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        port=_int_env("PORT", 8000),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
