"""Storage-layer errors raised by repositories."""


class ConstraintViolation(Exception):
    """Raised when a uniqueness or FK constraint rejects a write."""

    def __init__(self, message: str, constraint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.constraint = constraint
