"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [--role admin] [--name NAME] [--email EMAIL]
Example:
  python -m app.scripts.create_user admin your-secure-password --role admin --name "Admin"
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import ConflictError
from app.core.logging import configure_logging
from app.schemas.user import UserCreate
from app.services.users import create_user

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an archive user (admins can also use the API).")
    parser.add_argument("username", help="Username (1-255 chars, case-sensitive)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("--role", default="user", choices=["user", "admin"])
    parser.add_argument("--name", default=None, help="Display name (defaults to the username)")
    parser.add_argument("--email", default="", help="Email address")
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(get_settings().LOG_LEVEL)
    args = build_parser().parse_args(argv)

    username = args.username.strip()
    try:
        data = UserCreate(
            username=username,
            name=args.name or username,
            email=args.email or f"{username}@localhost",
            password=args.password,
            role=args.role,
        )
    except ValueError as e:
        print(f"Invalid user data: {e}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user_id = create_user(db, data)
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{username}' (id={user_id}) with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
