"""Pydantic request/response schemas."""

from app.schemas.auth import Identity, LoginRequest, LoginResponse
from app.schemas.errors import ErrorResponse
from app.schemas.health import HealthResponse
from app.schemas.member import (
    CreateMemberRequest,
    MemberRequest,
    MemberResponse,
    PagedMemberResponse,
    UpdateMemberRequest,
)

__all__ = [
    "CreateMemberRequest",
    "ErrorResponse",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "MemberRequest",
    "MemberResponse",
    "PagedMemberResponse",
    "UpdateMemberRequest",
]
