"""
Create a user with its profile photograph. Run from project root:
  python -m userhub.scripts.create_user USERNAME PASSWORD --source URI [--media-type TYPE]
Example:
  python -m userhub.scripts.create_user alice your-secure-password --source https://cdn.example.com/alice.png
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from userhub.core.config import get_settings
from userhub.core.database import SessionLocal
from userhub.core.exceptions import ConflictError, UserHubError
from userhub.schemas.user import UserCreateRequest
from userhub.services.user_service import UserService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a userhub user (role USER, status ACTIVE).")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--source", required=True, help="Photograph URI or path")
    parser.add_argument("--media-type", default="image/png", help="Photograph MIME type")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=get_settings().LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        request = UserCreateRequest(
            username=args.username.strip(),
            password=args.password,
            photograph={"source": args.source, "media_type": args.media_type},
        )
    except ValidationError as e:
        print(f"Invalid input: {e.errors()[0]['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = UserService(db).create_user(request)
    except ConflictError:
        print(f"User '{request.username}' already exists.", file=sys.stderr)
        return 1
    except UserHubError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created user '{user.username}' with id {user.user_id}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
