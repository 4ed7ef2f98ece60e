import argparse
import json
import logging
import sys
from pathlib import Path

from sqlalchemy.exc import IntegrityError

from crossword_api.config import LOG_LEVEL
from crossword_api.database import SessionLocal, init_db
from crossword_api.errors import ServiceError
from crossword_api.logging_setup import setup_console_logging
from crossword_api.services.auth_service import create_access_token
from crossword_api.services.puzzle_service import import_pack, import_puzzles
from crossword_api.services.user_service import create_user, get_user_by_id

setup_console_logging(LOG_LEVEL)
logger = logging.getLogger("crossword_api.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Crossword puzzle backend tools")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create database tables")

    imp = sub.add_parser("import-puzzles", help="Import generated puzzles from JSON")
    imp.add_argument("file", type=Path, help="JSON file with a list of puzzles")

    pack = sub.add_parser("import-pack", help="Import a puzzle pack and its puzzles from JSON")
    pack.add_argument("file", type=Path, help="JSON object describing the pack")

    user = sub.add_parser("create-user", help="Create a user with a default profile")
    user.add_argument("email")
    user.add_argument("username")
    user.add_argument("--guest", action="store_true", help="Mark the user as a guest")

    token = sub.add_parser("token", help="Print a bearer token for a user")
    token.add_argument("user_id", type=int)
    token.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args(argv)


def load_puzzle_file(path: Path) -> list[dict[str, object]]:
    """Read a generator output file: a list of puzzles or {"puzzles": [...]}."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("puzzles", [])
    if not isinstance(payload, list):
        raise ValueError("Expected a JSON list of puzzles")
    return payload


def load_pack_file(path: Path) -> dict[str, object]:
    """Read a pack file: pack fields plus a nested "puzzles" list."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Expected a JSON object describing the pack")
    return payload


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    init_db()

    if args.command == "init-db":
        print("Database initialized")
        return 0

    with SessionLocal() as db:
        try:
            if args.command == "import-puzzles":
                puzzles = import_puzzles(db, load_puzzle_file(args.file))
                print(f"Imported {len(puzzles)} puzzles from {args.file}")
            elif args.command == "import-pack":
                pack = import_pack(db, load_pack_file(args.file))
                print(f"Imported pack {pack.id} ({pack.name}) with {pack.puzzle_count} puzzles")
            elif args.command == "create-user":
                user = create_user(db, args.email, args.username, is_guest=args.guest)
                print(f"Created user {user.id} ({user.username})")
            elif args.command == "token":
                if get_user_by_id(db, args.user_id) is None:
                    print(f"User {args.user_id} not found", file=sys.stderr)
                    return 1
                print(create_access_token(args.user_id, args.expires_minutes))
        except IntegrityError:
            logger.error(f"{args.command} failed: duplicate record")
            return 1
        except (ServiceError, ValueError) as exc:
            detail = getattr(exc, "detail", str(exc))
            logger.error(f"{args.command} failed: {detail}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
