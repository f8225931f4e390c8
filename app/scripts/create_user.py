"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD --age N [--hobby H ...] [--admin]
Example:
  python -m app.scripts.create_user admin@example.com 'a-secure-password' --age 30 --admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError as SchemaValidationError

from app.core.config import settings
from app.core.database import SessionLocal, init_db
from app.core.errors import ConflictError
from app.core.security import role_for
from app.schemas.user import UserWrite
from app.services.users import create_user

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a user (no registration UI).")
    parser.add_argument("username", help="Username (1-255 chars, unique)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--age", type=int, required=True, help="Age in years")
    parser.add_argument(
        "--hobby",
        dest="hobbies",
        action="append",
        default=[],
        help="Hobby (repeat for several)",
    )
    parser.add_argument("--admin", action="store_true", help="Grant the Admin role")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        data = UserWrite(
            username=args.username,
            password=args.password,
            is_admin=args.admin,
            age=args.age,
            hobbies=args.hobbies,
        )
    except SchemaValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    if settings.DB_CREATE_TABLES:
        init_db()
    db = SessionLocal()
    try:
        user = create_user(db, data)
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    role = role_for(user.is_admin)
    print(f"Created user '{user.username}' ({user.id}) with role '{role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
