"""Test environment defaults, applied before the app modules are imported."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.pop("MONGO_URL", None)
