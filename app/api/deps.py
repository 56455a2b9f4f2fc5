"""FastAPI dependencies: service wiring and the per-route role gate."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.repositories.members import MemberRepository
from app.repositories.users import UserRepository
from app.schemas.auth import Identity
from app.services.authentication import AuthenticationService
from app.services.errors import ForbiddenError, UnauthorizedError
from app.services.member_cache import MemberCache
from app.services.members import MemberService
from app.services.tokens import TokenService

# Declares the bearer scheme in the OpenAPI document; the token itself is
# decoded by IdentityMiddleware.
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_member_cache(request: Request) -> MemberCache:
    return request.app.state.member_cache


def get_member_service(
    db: Annotated[Session, Depends(get_db)],
    cache: Annotated[MemberCache, Depends(get_member_cache)],
) -> MemberService:
    return MemberService(MemberRepository(db), cache)


def get_authentication_service(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthenticationService:
    return AuthenticationService(UserRepository(db), tokens)


def get_current_identity(request: Request) -> Identity | None:
    """Identity attached by IdentityMiddleware, or None for anonymous requests."""
    return getattr(request.state, "identity", None)


def require_roles(*roles: str) -> Callable[..., Identity]:
    """
    Build a dependency that admits only callers whose role is one of roles.

    No identity -> UnauthorizedError (401); identity with another role ->
    ForbiddenError (403). Roles compare exactly; there is no hierarchy.
    """
    if not roles:
        raise ValueError("require_roles needs at least one role")
    allowed = frozenset(roles)

    def dependency(
        identity: Annotated[Identity | None, Depends(get_current_identity)],
        _credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    ) -> Identity:
        if identity is None:
            raise UnauthorizedError("Full authentication is required to access this resource")
        if identity.role not in allowed:
            raise ForbiddenError("Access denied: insufficient role")
        return identity

    dependency.__name__ = "require_" + "_or_".join(sorted(r.lower() for r in allowed))
    return dependency
