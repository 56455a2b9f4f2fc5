"""Credential store access: look up user accounts by username."""

from sqlalchemy.orm import Session

from app.models.user import User


class UserRepository:
    """Read-only access to the users table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()
