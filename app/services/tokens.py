"""Issue and validate signed, time-limited identity tokens (HS256 JWT)."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

ROLE_CLAIM = "role"
REQUIRED_CLAIMS = ["sub", ROLE_CLAIM, "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Token issuer and verifier bound to one shared secret and TTL.

    The secret and TTL are fixed at construction. Issuer and verifier live in
    the same process, so a symmetric HMAC key is enough.
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        if expires_in <= timedelta(0):
            raise ValueError("Token TTL must be positive")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock
        self.expires_in = expires_in
        logger.info(
            "Token service initialized with expiration of %s seconds",
            int(expires_in.total_seconds()),
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            expires_in=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )

    def issue(self, username: str, role: str) -> str:
        """Create a token carrying sub=username, role, iat=now and exp=now+TTL."""
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": username,
            ROLE_CLAIM: role,
            "iat": now,
            "exp": now + self.expires_in,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        logger.debug("Issued token for user %s with role %s", username, role)
        return token

    def validate(self, token: object) -> bool:
        """
        True iff the token is well formed, correctly signed, carries every
        required claim and has not expired. Never raises.
        """
        if not isinstance(token, str) or not token:
            return False
        try:
            self._decode(token)
        except jwt.InvalidTokenError as e:
            logger.info("Token validation failed: %s", e)
            return False
        except (ValueError, TypeError) as e:
            logger.info("Token validation failed on malformed input: %s", e)
            return False
        return True

    def subject_of(self, token: str) -> str:
        """Username carried by the token. Raises jwt.InvalidTokenError if it does not verify."""
        return self._decode(token)["sub"]

    def role_of(self, token: str) -> str:
        """Role carried by the token. Raises jwt.InvalidTokenError if it does not verify."""
        role = self._decode(token)[ROLE_CLAIM]
        if not isinstance(role, str):
            raise jwt.InvalidTokenError("Role claim must be a string")
        return role

    def _decode(self, token: str) -> dict[str, Any]:
        return jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
