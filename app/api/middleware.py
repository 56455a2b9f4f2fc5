"""Request identity middleware: decode a bearer token into request.state.identity."""

import logging

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from app.schemas.auth import Identity
from app.services.tokens import TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Token part of an Authorization header, or None when there is no bearer header.

    Everything after the literal "Bearer " prefix is returned, including an
    empty string; validation rejects that later.
    """
    if authorization is None or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):]


def resolve_identity(authorization: str | None, tokens: TokenService) -> Identity | None:
    """Identity for the header, or None if absent or invalid. Never raises."""
    try:
        token = extract_bearer_token(authorization)
        if token is None or not tokens.validate(token):
            return None
        identity = Identity(username=tokens.subject_of(token), role=tokens.role_of(token))
    except Exception:
        logger.exception("Cannot resolve request identity from bearer token")
        return None
    logger.debug("Request authenticated as %s with role %s", identity.username, identity.role)
    return identity


class IdentityMiddleware:
    """
    ASGI middleware that attaches the caller's identity (or None) to every
    HTTP request and always hands the request on. Role checks happen later,
    per route, in require_roles.
    """

    def __init__(self, app: ASGIApp, tokens: TokenService) -> None:
        self.app = app
        self.tokens = tokens

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            authorization = Headers(scope=scope).get("authorization")
            scope.setdefault("state", {})["identity"] = resolve_identity(
                authorization, self.tokens
            )
        await self.app(scope, receive, send)
