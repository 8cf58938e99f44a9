# tests/test_manage.py
"""Tests for the operator CLI."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker

from bookclub.db.time import utcnow
from bookclub.models import Book, UserSession
from bookclub.scripts import manage
from bookclub.scripts.migrate import run_upgrade_head
from bookclub.services import auth_service


@pytest.fixture()
def cli_sessions(engine, monkeypatch):
    monkeypatch.setattr(manage, "SessionLocal", sessionmaker(bind=engine))


def test_set_role_promotes_user(cli_sessions, db_session, capsys) -> None:
    auth_service.register(db_session, "grace", "longenough")

    assert manage.main(["set-role", "grace", "admin"]) == 0
    assert "grace is now admin" in capsys.readouterr().out

    db_session.expire_all()
    assert auth_service.get_user_by_username(db_session, "grace").role == "admin"


def test_set_role_unknown_user(cli_sessions, capsys) -> None:
    assert manage.main(["set-role", "ghost", "admin"]) == 1
    assert "User not found" in capsys.readouterr().err


def test_set_role_rejects_unknown_roles() -> None:
    with pytest.raises(SystemExit):
        manage.main(["set-role", "grace", "owner"])


def test_purge_sessions(cli_sessions, db_session, capsys) -> None:
    user, _ = auth_service.register(db_session, "grace", "longenough")
    db_session.add(
        UserSession(
            user_id=user.id,
            session_token="stale",
            expires_at=utcnow() - timedelta(hours=1),
        )
    )
    db_session.commit()

    assert manage.main(["purge-sessions"]) == 0
    assert "removed 1 expired session(s)" in capsys.readouterr().out


def test_add_book_as_admin(cli_sessions, db_session, capsys) -> None:
    auth_service.register(db_session, "grace", "longenough")
    auth_service.set_role(db_session, "grace", "admin")

    code = manage.main(
        ["add-book", "Middlemarch", "--admin", "grace", "--author", "George Eliot",
         "--read-on", "2025-03"]
    )
    assert code == 0
    assert "Middlemarch (2025-03)" in capsys.readouterr().out
    assert db_session.query(Book).filter_by(title="Middlemarch").count() == 1


def test_add_book_requires_admin(cli_sessions, db_session, capsys) -> None:
    auth_service.register(db_session, "grace", "longenough")

    assert manage.main(["add-book", "Middlemarch", "--admin", "grace"]) == 1
    assert "Admin access required" in capsys.readouterr().err
    assert db_session.query(Book).count() == 0


def test_migrations_build_the_schema(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("ALEMBIC_URL", raising=False)
    url = f"sqlite:///{tmp_path / 'migrated.db'}"

    run_upgrade_head(url)

    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert tables >= {
        "users",
        "sessions",
        "books",
        "book_suggestions",
        "ratings",
        "meeting_dates",
        "meeting_votes",
        "alembic_version",
    }
