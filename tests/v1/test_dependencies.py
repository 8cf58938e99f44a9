# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

import pytest
from starlette.requests import Request

from bookclub.api.v1.dependencies import (
    get_admin_principal,
    get_current_principal,
    get_optional_principal,
    get_session_token,
)
from bookclub.core.errors import AuthError, ForbiddenError
from bookclub.core.settings import settings
from bookclub.services import auth_service
from bookclub.services.auth_service import Principal


def _request(cookie: str | None = None) -> Request:
    headers = []
    if cookie is not None:
        headers.append((b"cookie", f"{settings.session_cookie_name}={cookie}".encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


class TestSessionToken:
    def test_reads_cookie(self):
        assert get_session_token(_request("abc123")) == "abc123"

    def test_missing_cookie(self):
        assert get_session_token(_request()) is None


class TestPrincipalResolution:
    def test_optional_principal(self, db_session):
        user, token = auth_service.register(db_session, "heidi", "longenough")
        principal = get_optional_principal(token, db_session)
        assert principal is not None and principal.user_id == user.id
        assert get_optional_principal(None, db_session) is None

    def test_current_principal_requires_session(self):
        with pytest.raises(AuthError) as exc_info:
            get_current_principal(None)
        assert exc_info.value.status_code == 401

    def test_admin_principal(self):
        admin = Principal(user_id=1, username="carol", role="admin")
        assert get_admin_principal(admin) is admin
        with pytest.raises(ForbiddenError) as exc_info:
            get_admin_principal(Principal(user_id=2, username="alice", role="member"))
        assert exc_info.value.status_code == 403
