"""ORM model for application users (credential store for JWT login)."""

import uuid

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    Read-only from the API's perspective; rows come from the seed migration
    or the create_user script.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role_id = Column(
        Uuid,
        ForeignKey("roles.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )

    role = relationship("Role", lazy="joined")
