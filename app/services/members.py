"""Member CRUD: uniqueness and existence rules, paging, and the read cache."""

import logging
import math
import uuid

from app.models.member import Member
from app.repositories.errors import ConstraintViolation
from app.repositories.members import MemberRepository
from app.schemas.member import (
    CreateMemberRequest,
    MemberResponse,
    PagedMemberResponse,
    UpdateMemberRequest,
)
from app.services.errors import DuplicateEmailError, MemberNotFoundError
from app.services.member_cache import MemberCache

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
DEFAULT_SORT_FIELD = "createdAt"
DEFAULT_SORT_DIRECTION = "DESC"


def to_response(member: Member) -> MemberResponse:
    """Project an ORM row onto the API representation (a detached copy)."""
    return MemberResponse.model_validate(member)


def build_page(
    content: list[MemberResponse],
    page: int,
    size: int,
    total_elements: int,
) -> PagedMemberResponse:
    """Wrap one page of results with totals; last is true on or past the final page."""
    total_pages = math.ceil(total_elements / size) if size > 0 else 0
    return PagedMemberResponse(
        content=content,
        page=page,
        size=size,
        total_elements=total_elements,
        total_pages=total_pages,
        last=page >= total_pages - 1,
    )


def _not_found(member_id: uuid.UUID) -> MemberNotFoundError:
    return MemberNotFoundError(f"Member not found with id: {member_id}")


class MemberService:
    """
    Business operations over members.

    Writes check their precondition and mutate inside the repository's session,
    so each runs as one transaction. Cache entries are evicted only after the
    store accepted the write.
    """

    def __init__(self, repository: MemberRepository, cache: MemberCache) -> None:
        self.repository = repository
        self.cache = cache

    def list_members(
        self,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
        sort: str = DEFAULT_SORT_FIELD,
        direction: str = DEFAULT_SORT_DIRECTION,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> PagedMemberResponse:
        logger.info(
            "Fetching members page=%s size=%s sort=%s %s firstName=%s lastName=%s",
            page,
            size,
            sort,
            direction,
            first_name,
            last_name,
        )
        members, total = self.repository.search(
            page=page,
            size=size,
            sort=sort,
            direction=direction,
            first_name=first_name,
            last_name=last_name,
        )
        result = build_page([to_response(m) for m in members], page, size, total)
        logger.info("Fetched %s of %s members", len(result.content), total)
        return result

    def get_by_id(self, member_id: uuid.UUID) -> MemberResponse:
        cached = self.cache.get(member_id)
        if cached is not None:
            logger.debug("Member cache hit for id %s", member_id)
            return cached

        member = self.repository.find_by_id(member_id)
        if member is None:
            logger.warning("Member not found with id: %s", member_id)
            raise _not_found(member_id)
        response = to_response(member)
        self.cache.put(member_id, response)
        logger.info("Fetched member with id: %s", member_id)
        return response

    def create(self, request: CreateMemberRequest) -> MemberResponse:
        logger.info("Creating member with email: %s", request.email)
        if self.repository.exists_by_email(request.email):
            logger.warning("Duplicate email on create: %s", request.email)
            raise DuplicateEmailError(f"Member already exists with email: {request.email}")

        member = Member(
            first_name=request.first_name,
            last_name=request.last_name,
            date_of_birth=request.date_of_birth,
            email=request.email,
        )
        try:
            saved = self.repository.save(member)
        except ConstraintViolation as e:
            raise DuplicateEmailError(
                f"Member already exists with email: {request.email}", cause=e
            ) from e
        logger.info("Created member with id: %s", saved.id)
        return to_response(saved)

    def update(self, member_id: uuid.UUID, request: UpdateMemberRequest) -> MemberResponse:
        logger.info("Updating member with id: %s", member_id)
        member = self.repository.find_by_id(member_id)
        if member is None:
            logger.warning("Member not found for update with id: %s", member_id)
            raise _not_found(member_id)

        if member.email != request.email and self.repository.exists_by_email(request.email):
            logger.warning("Duplicate email on update: %s", request.email)
            raise DuplicateEmailError(f"Email already in use: {request.email}")

        member.update_details(
            first_name=request.first_name,
            last_name=request.last_name,
            date_of_birth=request.date_of_birth,
            email=request.email,
        )
        try:
            saved = self.repository.save(member)
        except ConstraintViolation as e:
            raise DuplicateEmailError(f"Email already in use: {request.email}", cause=e) from e
        self.cache.evict(member_id)
        logger.info("Updated member with id: %s", member_id)
        return to_response(saved)

    def delete(self, member_id: uuid.UUID) -> None:
        logger.info("Deleting member with id: %s", member_id)
        if not self.repository.exists_by_id(member_id):
            logger.warning("Member not found for deletion with id: %s", member_id)
            raise _not_found(member_id)
        self.repository.delete_by_id(member_id)
        self.cache.evict(member_id)
        logger.info("Deleted member with id: %s", member_id)
