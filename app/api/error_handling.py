"""Translate service failures and request errors into the shared error body."""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.errors import ErrorResponse
from app.services.errors import ServiceError

logger = logging.getLogger(__name__)

_STATUS_TO_ERROR = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    415: "Unsupported Media Type",
    500: "Internal Server Error",
}

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    errors: list[str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(UTC),
        status=status_code,
        error=error,
        message=message,
        path=request.url.path,
        errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


def format_validation_errors(exc: RequestValidationError) -> list[str]:
    """One 'field: message' line per failed constraint (location prefix dropped)."""
    messages: list[str] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        messages.append(f"{field}: {msg}" if field else msg)
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers so every non-2xx response uses ErrorResponse."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        logger.warning(
            "Request failed: %s",
            exc.message,
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
                "error_type": type(exc).__name__,
            },
        )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return error_response(request, exc.status_code, exc.error, exc.message, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = format_validation_errors(exc)
        logger.warning(
            "Validation failed on %s %s: %s", request.method, request.url.path, errors
        )
        return error_response(request, 400, "Validation Failed", "Invalid input data", errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        error = _STATUS_TO_ERROR.get(exc.status_code, "Error")
        message = exc.detail if isinstance(exc.detail, str) else error
        return error_response(
            request, exc.status_code, error, message, headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        return error_response(request, 500, "Internal Server Error", INTERNAL_ERROR_MESSAGE)
