"""Typed service-layer failures, translated to HTTP responses at the API boundary."""


class ServiceError(Exception):
    """
    Base class for named business failures.

    Each subclass fixes the HTTP status and the error category string that the
    API boundary reports; services never build HTTP responses themselves.
    """

    status_code: int = 400
    error: str = "Bad Request"

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class InvalidCredentialsError(ServiceError):
    """Unknown username or wrong password; deliberately indistinguishable."""

    status_code = 401
    error = "Unauthorized"


class UnauthorizedError(ServiceError):
    """No valid identity attached to the request."""

    status_code = 401
    error = "Unauthorized"


class ForbiddenError(ServiceError):
    """Valid identity whose role is not allowed on the route."""

    status_code = 403
    error = "Forbidden"


class MemberNotFoundError(ServiceError):
    status_code = 404
    error = "Not Found"


class DuplicateEmailError(ServiceError):
    """Email already used by another member (pre-check or store constraint)."""

    status_code = 400
    error = "Bad Request"
