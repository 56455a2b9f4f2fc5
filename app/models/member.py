"""ORM model for member records."""

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import Column, Date, DateTime, String, Uuid

from app.models.base import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


class Member(Base):
    """
    A member record. Email is unique across all members.

    id and created_at are assigned once at construction; updated_at moves
    forward on every update_details call.
    """

    __tablename__ = "members"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __init__(self, **kwargs: object) -> None:
        # Both timestamps come from the same instant so updated_at >= created_at.
        now = utcnow()
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        super().__init__(**kwargs)

    def update_details(
        self,
        first_name: str,
        last_name: str,
        date_of_birth: date,
        email: str,
    ) -> None:
        self.first_name = first_name
        self.last_name = last_name
        self.date_of_birth = date_of_birth
        self.email = email
        self.updated_at = utcnow()
