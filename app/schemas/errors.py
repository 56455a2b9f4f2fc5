"""Error body returned for every non-2xx response."""

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    timestamp: datetime
    status: int = Field(..., description="HTTP status code")
    error: str = Field(..., description="Error category (e.g. Not Found, Validation Failed)")
    message: str
    path: str = Field(..., description="Request path that produced the error")
    errors: list[str] | None = Field(
        default=None,
        description="Field-level validation messages, when applicable",
    )
