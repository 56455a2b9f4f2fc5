"""
Create a user (e.g. an extra admin). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user alice your-secure-password ROLE_ADMIN
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging import configure_logging
from app.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN, hash_password
from app.models.role import ROLE_NAMES, ROLE_USER, Role
from app.models.user import User

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Members API user (no registration UI).")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=list(ROLE_NAMES))
    args = parser.parse_args(argv)

    configure_logging(get_settings())

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password.strip() or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be 1-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.username == username).first()
        if existing:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        role = db.query(Role).filter(Role.name == args.role).first()
        if role is None:
            print(f"Role '{args.role}' not found; run the migrations first.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            password_hash=hash_password(args.password),
            role_id=role.id,
        )
        db.add(user)
        db.commit()
        logger.info("Created user %s with role %s", username, args.role)
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
