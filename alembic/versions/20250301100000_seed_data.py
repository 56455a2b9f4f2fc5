"""Seed roles, the admin/user accounts and sample members.

Revision ID: 20250301100000
Revises: 20250301000000
Create Date: 2025-03-01

Both seeded accounts use the password 'password' (bcrypt, cost 10).
"""
import uuid
from datetime import date
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20250301100000"
down_revision: Union[str, None] = "20250301000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ADMIN_ROLE_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
USER_ROLE_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")
ADMIN_USER_ID = uuid.UUID("33333333-3333-3333-3333-333333333333")
PLAIN_USER_ID = uuid.UUID("44444444-4444-4444-4444-444444444444")
SEED_PASSWORD_HASH = "$2a$10$G3m/gUKKImoykV4DZjkTROTDE6WywpNHKmkI4eO0yGZ5Bb6PluNSW"

SAMPLE_MEMBERS = [
    ("John", "Doe", date(1985, 5, 15), "john.doe@example.com"),
    ("Jane", "Smith", date(1990, 8, 22), "jane.smith@example.com"),
    ("Bob", "Johnson", date(1978, 12, 10), "bob.johnson@example.com"),
]

roles = sa.table("roles", sa.column("id", sa.Uuid()), sa.column("name", sa.String()))
users = sa.table(
    "users",
    sa.column("id", sa.Uuid()),
    sa.column("username", sa.String()),
    sa.column("password_hash", sa.String()),
    sa.column("role_id", sa.Uuid()),
)
members = sa.table(
    "members",
    sa.column("id", sa.Uuid()),
    sa.column("first_name", sa.String()),
    sa.column("last_name", sa.String()),
    sa.column("date_of_birth", sa.Date()),
    sa.column("email", sa.String()),
)


def upgrade() -> None:
    op.bulk_insert(
        roles,
        [
            {"id": ADMIN_ROLE_ID, "name": "ROLE_ADMIN"},
            {"id": USER_ROLE_ID, "name": "ROLE_USER"},
        ],
    )
    op.bulk_insert(
        users,
        [
            {
                "id": ADMIN_USER_ID,
                "username": "admin",
                "password_hash": SEED_PASSWORD_HASH,
                "role_id": ADMIN_ROLE_ID,
            },
            {
                "id": PLAIN_USER_ID,
                "username": "user",
                "password_hash": SEED_PASSWORD_HASH,
                "role_id": USER_ROLE_ID,
            },
        ],
    )
    op.bulk_insert(
        members,
        [
            {
                "id": uuid.uuid4(),
                "first_name": first,
                "last_name": last,
                "date_of_birth": dob,
                "email": email,
            }
            for first, last, dob, email in SAMPLE_MEMBERS
        ],
    )


def downgrade() -> None:
    op.execute(
        members.delete().where(members.c.email.in_([m[3] for m in SAMPLE_MEMBERS]))
    )
    op.execute(users.delete().where(users.c.id.in_([ADMIN_USER_ID, PLAIN_USER_ID])))
    op.execute(roles.delete().where(roles.c.id.in_([ADMIN_ROLE_ID, USER_ROLE_ID])))
