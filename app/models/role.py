"""ORM model for authorization roles."""

import uuid

from sqlalchemy import Column, String, Uuid

from app.models.base import Base

ROLE_ADMIN = "ROLE_ADMIN"
ROLE_USER = "ROLE_USER"
ROLE_NAMES: tuple[str, ...] = (ROLE_ADMIN, ROLE_USER)


class Role(Base):
    """Named role referenced by user accounts. Immutable once referenced."""

    __tablename__ = "roles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False, unique=True)
