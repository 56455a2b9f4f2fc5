"""Shared builders for unit and end-to-end tests."""

import uuid
from collections.abc import Generator
from datetime import UTC, date, datetime

from fastapi import FastAPI
from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import get_db
from app.core.security import hash_password
from app.main import create_app
from app.models import ROLE_ADMIN, ROLE_USER, Base, Member, Role, User

TEST_SECRET = "test-secret-key-for-testing-only-0123456789"
OTHER_SECRET = "another-secret-key-nobody-shares-9876543210"
SEED_PASSWORD = "password"


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": SecretStr(TEST_SECRET),
        "JWT_EXPIRE_MINUTES": 60,
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_credentials(session_factory: sessionmaker) -> None:
    """Roles plus an 'admin' (ROLE_ADMIN) and a 'user' (ROLE_USER) account."""
    db = session_factory()
    try:
        admin_role = Role(id=uuid.uuid4(), name=ROLE_ADMIN)
        user_role = Role(id=uuid.uuid4(), name=ROLE_USER)
        db.add_all([admin_role, user_role])
        db.flush()
        hashed = hash_password(SEED_PASSWORD, rounds=4)
        db.add_all(
            [
                User(id=uuid.uuid4(), username="admin", password_hash=hashed, role_id=admin_role.id),
                User(id=uuid.uuid4(), username="user", password_hash=hashed, role_id=user_role.id),
            ]
        )
        db.commit()
    finally:
        db.close()


def seed_members(session_factory: sessionmaker) -> list[uuid.UUID]:
    rows = [
        ("John", "Doe", date(1985, 5, 15), "john.doe@example.com"),
        ("Jane", "Smith", date(1990, 8, 22), "jane.smith@example.com"),
        ("Bob", "Johnson", date(1978, 12, 10), "bob.johnson@example.com"),
    ]
    db = session_factory()
    try:
        members = [
            Member(first_name=f, last_name=l, date_of_birth=dob, email=e)
            for f, l, dob, e in rows
        ]
        db.add_all(members)
        db.commit()
        return [m.id for m in members]
    finally:
        db.close()


def build_test_app(settings: Settings | None = None) -> tuple[FastAPI, sessionmaker]:
    """App wired to its own in-memory database with seeded credentials."""
    app = create_app(settings or make_settings())
    session_factory = make_session_factory()
    seed_credentials(session_factory)

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app, session_factory


def make_member(
    first_name: str = "John",
    last_name: str = "Doe",
    email: str = "john.doe@example.com",
    date_of_birth: date = date(1985, 5, 15),
) -> Member:
    """Detached Member with id and timestamps assigned, as the store would return it."""
    member = Member(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=date_of_birth,
        email=email,
    )
    member.created_at = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    member.updated_at = member.created_at
    return member
