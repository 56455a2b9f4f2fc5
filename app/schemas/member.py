"""Request/response schemas for member endpoints (camelCase on the wire)."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _require_text(value: str, message: str) -> str:
    if not value.strip():
        raise PydanticCustomError("blank", message)
    return value


class MemberRequest(BaseModel):
    """Fields accepted when creating or updating a member."""

    model_config = _CAMEL_CONFIG

    first_name: str = Field(..., max_length=NAME_MAX_LENGTH, description="First name")
    last_name: str = Field(..., max_length=NAME_MAX_LENGTH, description="Last name")
    date_of_birth: date = Field(..., description="Date of birth; must be in the past")
    email: EmailStr = Field(..., description="Email address; unique across members")

    @field_validator("first_name")
    @classmethod
    def first_name_not_blank(cls, v: str) -> str:
        return _require_text(v, "First name is required")

    @field_validator("last_name")
    @classmethod
    def last_name_not_blank(cls, v: str) -> str:
        return _require_text(v, "Last name is required")

    @field_validator("date_of_birth")
    @classmethod
    def date_of_birth_in_past(cls, v: date) -> date:
        if v >= date.today():
            raise PydanticCustomError("past_date", "Date of birth must be in the past")
        return v

    @field_validator("email")
    @classmethod
    def email_length(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise PydanticCustomError(
                "too_long", "Email must be at most {max} characters", {"max": EMAIL_MAX_LENGTH}
            )
        return v


class CreateMemberRequest(MemberRequest):
    """Body for POST /members."""


class UpdateMemberRequest(MemberRequest):
    """Body for PUT /members/{id}; replaces every editable field."""


class MemberResponse(BaseModel):
    """
    Member projection returned by the API and held by the member cache.

    Frozen so cached copies cannot be mutated by callers.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )

    id: uuid.UUID
    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: date | None = None
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PagedMemberResponse(BaseModel):
    """One page of members plus paging metadata (page is zero-based)."""

    model_config = _CAMEL_CONFIG

    content: list[MemberResponse] = Field(default_factory=list)
    page: int = Field(..., ge=0)
    size: int = Field(..., ge=1)
    total_elements: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    last: bool
