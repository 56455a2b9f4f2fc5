"""Login endpoint: exchange username/password for a bearer JWT."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_authentication_service
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.errors import ErrorResponse
from app.services.authentication import AuthenticationService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request data"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
def login(
    body: LoginRequest,
    auth: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    logger.info("Received login request for username: %s", body.username)
    return auth.authenticate(body.username, body.password)
