"""Member CRUD endpoints. Reads need USER or ADMIN; writes need ADMIN."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.deps import get_member_service, require_roles
from app.models.role import ROLE_ADMIN, ROLE_USER
from app.schemas.auth import Identity
from app.schemas.errors import ErrorResponse
from app.schemas.member import (
    CreateMemberRequest,
    MemberResponse,
    PagedMemberResponse,
    UpdateMemberRequest,
)
from app.services.members import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
    MemberService,
)

logger = logging.getLogger(__name__)
router = APIRouter()

require_reader = require_roles(ROLE_USER, ROLE_ADMIN)
require_admin = require_roles(ROLE_ADMIN)

_AUTH_ERRORS = {
    401: {"model": ErrorResponse, "description": "JWT token missing or invalid"},
    403: {"model": ErrorResponse, "description": "Insufficient role"},
}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Member not found"}}
_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid data or duplicate email"}}

MemberServiceDep = Annotated[MemberService, Depends(get_member_service)]


@router.get(
    "",
    response_model=PagedMemberResponse,
    response_model_exclude_none=True,
    responses={**_AUTH_ERRORS, **_BAD_REQUEST},
)
def list_members(
    _reader: Annotated[Identity, Depends(require_reader)],
    members: MemberServiceDep,
    page: Annotated[int, Query(ge=0, description="Page number (0-indexed)")] = 0,
    size: Annotated[int, Query(ge=1, description="Number of items per page")] = DEFAULT_PAGE_SIZE,
    sort: Annotated[str, Query(description="Field to sort by")] = DEFAULT_SORT_FIELD,
    direction: Annotated[str, Query(description="Sort direction (ASC or DESC)")] = DEFAULT_SORT_DIRECTION,
    first_name: Annotated[
        str | None,
        Query(alias="firstName", description="Case-insensitive partial match on first name"),
    ] = None,
    last_name: Annotated[
        str | None,
        Query(alias="lastName", description="Case-insensitive partial match on last name"),
    ] = None,
) -> PagedMemberResponse:
    """
    Paginated list of members, optionally filtered by first or last name.

    Filtering matches members whose first name contains firstName OR whose
    last name contains lastName.
    """
    return members.list_members(
        page=page,
        size=size,
        sort=sort,
        direction=direction,
        first_name=first_name,
        last_name=last_name,
    )


@router.get(
    "/{member_id}",
    response_model=MemberResponse,
    response_model_exclude_none=True,
    responses={**_AUTH_ERRORS, **_NOT_FOUND},
)
def get_member(
    member_id: uuid.UUID,
    _reader: Annotated[Identity, Depends(require_reader)],
    members: MemberServiceDep,
) -> MemberResponse:
    """Single member by id; served from the read cache when possible."""
    return members.get_by_id(member_id)


@router.post(
    "",
    response_model=MemberResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={**_AUTH_ERRORS, **_BAD_REQUEST},
)
def create_member(
    body: CreateMemberRequest,
    admin: Annotated[Identity, Depends(require_admin)],
    members: MemberServiceDep,
) -> MemberResponse:
    """Create a member (admin only). Email must be unique."""
    created = members.create(body)
    logger.info("Member %s created by %s", created.id, admin.username)
    return created


@router.put(
    "/{member_id}",
    response_model=MemberResponse,
    response_model_exclude_none=True,
    responses={**_AUTH_ERRORS, **_NOT_FOUND, **_BAD_REQUEST},
)
def update_member(
    member_id: uuid.UUID,
    body: UpdateMemberRequest,
    admin: Annotated[Identity, Depends(require_admin)],
    members: MemberServiceDep,
) -> MemberResponse:
    """Replace a member's details (admin only). Evicts the cached copy."""
    updated = members.update(member_id, body)
    logger.info("Member %s updated by %s", member_id, admin.username)
    return updated


@router.delete(
    "/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_AUTH_ERRORS, **_NOT_FOUND},
)
def delete_member(
    member_id: uuid.UUID,
    admin: Annotated[Identity, Depends(require_admin)],
    members: MemberServiceDep,
) -> Response:
    """Delete a member (admin only). Evicts the cached copy."""
    members.delete(member_id)
    logger.info("Member %s deleted by %s", member_id, admin.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
