"""Request/response schemas for auth endpoints and the request identity."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from app.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("blank", "Username is required")
        return v

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("blank", "Password is required")
        return v


class LoginResponse(BaseModel):
    """JWT access token returned after successful login."""

    token: str = Field(..., description="JWT access token")
    type: str = Field(default="Bearer", description="Token type for the Authorization header")
    username: str = Field(..., description="Authenticated username")
    role: str = Field(..., description="Role name embedded in the token (e.g. ROLE_ADMIN)")


class Identity(BaseModel):
    """Authenticated caller decoded from a bearer token, attached per request."""

    model_config = ConfigDict(frozen=True)

    username: str
    role: str
