"""Member store: persistence, search and paging over the members table."""

import logging
import re
import uuid

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import or_, true
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.models.member import Member
from app.repositories.errors import ConstraintViolation

logger = logging.getLogger(__name__)

SORT_DIRECTIONS = frozenset({"asc", "desc"})

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _to_column_name(field: str) -> str:
    """Map an API property name (createdAt) to its column name (created_at)."""
    return _CAMEL_BOUNDARY.sub("_", field).lower()


def _contains(column: ColumnElement, value: str | None) -> ColumnElement:
    """Case-insensitive substring match; an absent value matches every row."""
    if value is None:
        return true()
    return column.icontains(value, autoescape=True)


def parse_direction(direction: str) -> str:
    """Return 'asc' or 'desc'. Raises ValueError for anything else."""
    normalized = (direction or "").strip().lower()
    if normalized not in SORT_DIRECTIONS:
        raise ValueError(
            f"Invalid value '{direction}' for sort direction; has to be either 'desc' or 'asc'"
        )
    return normalized


class MemberRepository:
    """
    Thin wrapper over a SQLAlchemy session for the members table.

    Writes commit immediately; a failed commit is rolled back and reported as
    ConstraintViolation when the database rejected it on a unique constraint.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_id(self, member_id: uuid.UUID) -> Member | None:
        return self.db.get(Member, member_id)

    def exists_by_id(self, member_id: uuid.UUID) -> bool:
        return (
            self.db.query(Member.id).filter(Member.id == member_id).first() is not None
        )

    def exists_by_email(self, email: str) -> bool:
        return (
            self.db.query(Member.id).filter(Member.email == email).first() is not None
        )

    def search(
        self,
        *,
        page: int,
        size: int,
        sort: str,
        direction: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> tuple[list[Member], int]:
        """
        Return one page of members and the total match count.

        The sort field is passed through as-is: an unknown property name raises
        KeyError from the mapper rather than being silently ignored.
        """
        query = self.db.query(Member)
        if first_name is not None or last_name is not None:
            query = query.filter(
                or_(
                    _contains(Member.first_name, first_name),
                    _contains(Member.last_name, last_name),
                )
            )
        total = query.count()

        column = sa_inspect(Member).columns[_to_column_name(sort)]
        order = column.desc() if parse_direction(direction) == "desc" else column.asc()
        items = (
            query.order_by(order, Member.id)
            .offset(page * size)
            .limit(size)
            .all()
        )
        return items, total

    def save(self, member: Member) -> Member:
        """Insert or update the member and commit; returns the refreshed row."""
        self.db.add(member)
        self._commit()
        self.db.refresh(member)
        return member

    def delete_by_id(self, member_id: uuid.UUID) -> int:
        deleted = (
            self.db.query(Member)
            .filter(Member.id == member_id)
            .delete(synchronize_session=False)
        )
        self._commit()
        return deleted

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Member write rejected by store constraint: %s", e.orig)
            raise ConstraintViolation("Member violates a unique constraint", "ix_members_email") from e
        except Exception:
            self.db.rollback()
            raise
