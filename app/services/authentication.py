"""Verify username/password against the credential store and issue a token."""

import logging

from app.core.security import verify_password
from app.repositories.users import UserRepository
from app.schemas.auth import LoginResponse
from app.services.errors import InvalidCredentialsError
from app.services.tokens import TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


class AuthenticationService:
    """Single-attempt login: one lookup, one hash check, no retries."""

    def __init__(self, users: UserRepository, tokens: TokenService) -> None:
        self.users = users
        self.tokens = tokens

    def authenticate(self, username: str, password: str) -> LoginResponse:
        """
        Return a token for valid credentials.

        Raises InvalidCredentialsError with the same message whether the
        username is unknown or the password is wrong; only the log says which.
        """
        logger.info("Authenticating user: %s", username)
        user = self.users.find_by_username(username)
        if user is None:
            logger.warning("Authentication failed: unknown username %s", username)
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)
        if not verify_password(password, user.password_hash):
            logger.warning("Authentication failed: wrong password for username %s", username)
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        role = user.role.name
        token = self.tokens.issue(user.username, role)
        logger.info("Authenticated user %s with role %s", user.username, role)
        return LoginResponse(token=token, username=user.username, role=role)
