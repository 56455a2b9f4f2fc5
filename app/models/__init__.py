"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.member import Member
from app.models.role import ROLE_ADMIN, ROLE_NAMES, ROLE_USER, Role
from app.models.user import User

__all__ = ["Base", "Member", "ROLE_ADMIN", "ROLE_NAMES", "ROLE_USER", "Role", "User"]
