"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from bookclub.core.errors import AuthError
from bookclub.core.settings import settings
from bookclub.db.session import get_db
from bookclub.services.auth_service import Principal, resolve_session

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_session_token(request: Request) -> str | None:
    """Return the raw session token from the request cookie, if any."""
    return request.cookies.get(settings.session_cookie_name)


SessionTokenDep = Annotated[str | None, Depends(get_session_token)]


def get_optional_principal(token: SessionTokenDep, db: SessionDep) -> Principal | None:
    """Resolve the session cookie to a principal without requiring one."""
    return resolve_session(db, token)


OptionalPrincipalDep = Annotated[Principal | None, Depends(get_optional_principal)]


def get_current_principal(principal: OptionalPrincipalDep) -> Principal:
    """Require a valid, unexpired session.

    Raises:
        AuthError: If the cookie is missing, unknown or expired.
    """
    if principal is None:
        raise AuthError("Invalid or expired session")
    return principal


PrincipalDep = Annotated[Principal, Depends(get_current_principal)]


def get_admin_principal(principal: PrincipalDep) -> Principal:
    """Require a session whose user holds the admin role."""
    principal.require_admin()
    return principal


AdminDep = Annotated[Principal, Depends(get_admin_principal)]


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session cookie with the site-wide security attributes."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )
