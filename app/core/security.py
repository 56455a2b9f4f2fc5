"""Password hashing and verification for the credential store."""

import bcrypt

from app.core.config import settings

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (accepts $2a$/$2b$ hashes)."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
