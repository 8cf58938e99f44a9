# src/bookclub/scripts/manage.py
"""Operator commands for the book club database.

Typical usage:
  python -m bookclub.scripts.manage create-tables
  python -m bookclub.scripts.manage migrate
  python -m bookclub.scripts.manage set-role alice admin
  python -m bookclub.scripts.manage purge-sessions
  python -m bookclub.scripts.manage add-book "Middlemarch" --admin alice --read-on 2025-03
"""
from __future__ import annotations

import argparse
import logging
import sys

from bookclub.core.errors import BookClubError, NotFoundError
from bookclub.db.session import SessionLocal, create_tables
from bookclub.models.user import ROLE_ADMIN, ROLE_MEMBER
from bookclub.scripts.migrate import run_upgrade_head
from bookclub.services import auth_service, book_service
from bookclub.services.auth_service import Principal


def _create_tables(args: argparse.Namespace) -> int:
    create_tables()
    print("[manage] tables created")
    return 0


def _migrate(args: argparse.Namespace) -> int:
    run_upgrade_head(args.url)
    print("[manage] database upgraded to head")
    return 0


def _set_role(args: argparse.Namespace) -> int:
    with SessionLocal() as db:
        user = auth_service.set_role(db, args.username, args.role)
        print(f"[manage] {user.username} is now {user.role}")
    return 0


def _add_book(args: argparse.Namespace) -> int:
    with SessionLocal() as db:
        operator = auth_service.get_user_by_username(db, args.admin)
        if operator is None:
            raise NotFoundError("User not found")
        book = book_service.create_book(
            db,
            Principal.from_user(operator),
            title=args.title,
            author=args.author,
            work_key=args.work_key,
            read_on=args.read_on,
            status=args.status,
        )
        print(f"[manage] added book {book.id}: {book.title} ({book.read_on})")
    return 0


def _purge_sessions(args: argparse.Namespace) -> int:
    with SessionLocal() as db:
        removed = auth_service.purge_expired_sessions(db)
    print(f"[manage] removed {removed} expired session(s)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the book club database")
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create-tables", help="Create any missing tables")
    create.set_defaults(handler=_create_tables)

    migrate = commands.add_parser("migrate", help="Apply Alembic migrations")
    migrate.add_argument("--url", default=None, help="Override the database URL")
    migrate.set_defaults(handler=_migrate)

    role = commands.add_parser("set-role", help="Grant or revoke the admin role")
    role.add_argument("username")
    role.add_argument("role", choices=[ROLE_MEMBER, ROLE_ADMIN])
    role.set_defaults(handler=_set_role)

    add_book = commands.add_parser("add-book", help="Add a book directly to the schedule")
    add_book.add_argument("title")
    add_book.add_argument("--admin", required=True, help="Admin username to act as")
    add_book.add_argument("--author", default=None)
    add_book.add_argument("--work-key", default=None)
    add_book.add_argument("--read-on", default="TBD", help="YYYY-MM, YYYY-MM-DD or TBD")
    add_book.add_argument("--status", choices=["unread", "read"], default="unread")
    add_book.set_defaults(handler=_add_book)

    purge = commands.add_parser("purge-sessions", help="Delete expired login sessions")
    purge.set_defaults(handler=_purge_sessions)
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except BookClubError as exc:
        print(f"[manage] ERROR: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
