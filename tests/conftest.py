"""Test environment: set before any app module reads settings."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only-0123456789")
os.environ.setdefault("JWT_EXPIRE_MINUTES", "60")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")
