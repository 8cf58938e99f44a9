# tests/v1/test_auth.py
"""Tests for authentication endpoints."""

from __future__ import annotations

from datetime import timedelta

from fastapi import status
from fastapi.testclient import TestClient

from bookclub.core.settings import settings
from bookclub.db.time import utcnow
from bookclub.models import UserSession
from tests.conftest import BASE_URL, TEST_PASSWORD, get_user


def _register(client: TestClient, username: str = "dana", password: str = TEST_PASSWORD):
    return client.post("/api/auth/register", json={"username": username, "password": password})


def test_register_user_success(client, db_session) -> None:
    response = _register(client)
    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["username"] == "dana"
    assert user["role"] == "member"
    assert "password" not in user and "password_digest" not in user

    stored = get_user(db_session, "dana")
    assert stored.password_digest != TEST_PASSWORD
    assert stored.password_digest.startswith("$argon2id$")


def test_register_sets_session_cookie_attributes(client) -> None:
    response = _register(client)
    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{settings.session_cookie_name}=")
    lowered = cookie.lower()
    assert "httponly" in lowered
    assert "secure" in lowered
    assert "samesite=strict" in lowered
    assert "path=/" in lowered
    assert f"max-age={30 * 24 * 60 * 60}" in lowered


def test_register_ignores_requested_role(client) -> None:
    response = client.post(
        "/api/auth/register",
        json={"username": "eve", "password": TEST_PASSWORD, "role": "admin"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["role"] == "member"


def test_register_duplicate_username(client) -> None:
    assert _register(client).status_code == status.HTTP_200_OK
    response = _register(client)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"error": "Username already exists"}


def test_register_short_password(client) -> None:
    response = _register(client, password="short")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Password must be at least 8 characters"}


def test_register_missing_fields(client) -> None:
    response = client.post("/api/auth/register", json={"username": "dana"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "error" in response.json()


def test_login_success_opens_new_session(client, member, db_session) -> None:
    response = client.post(
        "/api/auth/login",
        json={"username": member.username, "password": TEST_PASSWORD},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["id"] == member.user_id
    # Registration opened one session and the login another.
    sessions = db_session.query(UserSession).filter_by(user_id=member.user_id).count()
    assert sessions == 2


def test_login_trims_username_like_register(client) -> None:
    assert _register(client, username=" dave ").json()["user"]["username"] == "dave"

    for username in (" dave ", "dave"):
        response = client.post(
            "/api/auth/login", json={"username": username, "password": TEST_PASSWORD}
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["username"] == "dave"


def test_login_failures_are_indistinguishable(client, member) -> None:
    wrong_password = client.post(
        "/api/auth/login",
        json={"username": member.username, "password": "not the password"},
    )
    unknown_user = client.post(
        "/api/auth/login",
        json={"username": "nobody", "password": TEST_PASSWORD},
    )
    assert wrong_password.status_code == status.HTTP_401_UNAUTHORIZED
    assert unknown_user.status_code == status.HTTP_401_UNAUTHORIZED
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid credentials"}


def test_me_returns_session_owner(member) -> None:
    response = member.client.get("/api/auth/me")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"] == {
        "id": member.user_id,
        "username": member.username,
        "role": "member",
    }


def test_me_without_session(client) -> None:
    response = client.get("/api/auth/me")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"user": None}


def test_logout_invalidates_session(member, db_session) -> None:
    response = member.client.post("/api/auth/logout")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}

    assert member.client.get("/api/auth/me").json() == {"user": None}
    assert db_session.query(UserSession).filter_by(user_id=member.user_id).count() == 0


def test_logout_without_session_succeeds(client) -> None:
    response = client.post("/api/auth/logout")
    assert response.status_code == status.HTTP_200_OK


def test_logout_keeps_other_sessions(app, member) -> None:
    with TestClient(app, base_url=BASE_URL) as second:
        second.post(
            "/api/auth/login",
            json={"username": member.username, "password": TEST_PASSWORD},
        )
        member.client.post("/api/auth/logout")
        assert second.get("/api/auth/me").json()["user"]["id"] == member.user_id


def test_expired_session_is_rejected(app, member, db_session) -> None:
    token = "expired-" + "0" * 56
    db_session.add(
        UserSession(
            user_id=member.user_id,
            session_token=token,
            expires_at=utcnow() - timedelta(minutes=1),
        )
    )
    db_session.commit()

    with TestClient(app, base_url=BASE_URL) as stale:
        stale.cookies.set(settings.session_cookie_name, token)
        me = stale.get("/api/auth/me")
        assert me.status_code == status.HTTP_200_OK
        assert me.json() == {"user": None}
        assert "set-cookie" in me.headers

        stale.cookies.set(settings.session_cookie_name, token)
        protected = stale.post("/api/ratings", json={"bookId": 1, "rating": 5})
        assert protected.status_code == status.HTTP_401_UNAUTHORIZED
        assert protected.json() == {"error": "Invalid or expired session"}


def test_unknown_token_is_rejected(app) -> None:
    with TestClient(app, base_url=BASE_URL) as stranger:
        stranger.cookies.set(settings.session_cookie_name, "f" * 64)
        response = stranger.post("/api/book-suggestions", json={"title": "Emma"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
