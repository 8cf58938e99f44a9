# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from dataclasses import dataclass

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")

from bookclub.db.session import Base, build_engine
from bookclub.db.session import get_db as app_get_session
from bookclub.main import app as fastapi_app
from bookclub.models import Book, User
from bookclub.models.user import ROLE_ADMIN
from bookclub.services import auth_service, book_service
from bookclub.services.auth_service import Principal

TEST_DB_URL = "sqlite://"
# Session cookies are Secure, so the client must talk HTTPS to get them back.
BASE_URL = "https://testserver"
TEST_PASSWORD = "correct horse battery"


@dataclass
class Member:
    """A registered user together with a client holding their session cookie."""

    client: TestClient
    user_id: int
    username: str

    @property
    def principal(self) -> Principal:
        return Principal(user_id=self.user_id, username=self.username, role="member")


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        # Services commit, so wipe every table to give each test a clean database.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url=BASE_URL) as test_client:
        yield test_client


@pytest.fixture()
def make_member(app: FastAPI, db_session: Session) -> Iterator[Callable[..., Member]]:
    """Register users through the API, each with its own cookie-carrying client."""
    clients: list[TestClient] = []

    def _make(username: str, *, admin: bool = False) -> Member:
        test_client = TestClient(app, base_url=BASE_URL)
        clients.append(test_client)
        response = test_client.post(
            "/api/auth/register",
            json={"username": username, "password": TEST_PASSWORD},
        )
        assert response.status_code == 200, response.text
        if admin:
            auth_service.set_role(db_session, username, ROLE_ADMIN)
        return Member(
            client=test_client,
            user_id=response.json()["user"]["id"],
            username=username,
        )

    try:
        yield _make
    finally:
        for test_client in clients:
            test_client.close()


@pytest.fixture()
def member(make_member: Callable[..., Member]) -> Member:
    return make_member("alice")


@pytest.fixture()
def other_member(make_member: Callable[..., Member]) -> Member:
    return make_member("bob")


@pytest.fixture()
def admin(make_member: Callable[..., Member]) -> Member:
    return make_member("carol", admin=True)


@pytest.fixture()
def admin_principal(admin: Member) -> Principal:
    return Principal(user_id=admin.user_id, username=admin.username, role=ROLE_ADMIN)


@pytest.fixture()
def make_book(db_session: Session, admin_principal: Principal) -> Callable[..., Book]:
    """Insert books directly as the admin."""

    def _make(title: str = "Middlemarch", **kwargs: object) -> Book:
        return book_service.create_book(db_session, admin_principal, title=title, **kwargs)

    return _make


@pytest.fixture()
def book(make_book: Callable[..., Book]) -> Book:
    return make_book("Middlemarch", author="George Eliot", read_on="2025-03")


def get_user(db_session: Session, username: str) -> User:
    user = auth_service.get_user_by_username(db_session, username)
    assert user is not None
    return user
