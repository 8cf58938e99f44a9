# src/bookclub/api/v1/endpoints/auth.py
"""Authentication endpoints for the book club API."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from bookclub.api.v1.dependencies import (
    OptionalPrincipalDep,
    SessionDep,
    SessionTokenDep,
    clear_session_cookie,
    set_session_cookie,
)
from bookclub.models import User
from bookclub.schemas.common import SuccessResponse
from bookclub.schemas.user import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserResponse,
)
from bookclub.services import auth_service

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post(
    "/register",
    summary="Create a member account and start a session",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
)
async def register_user(
    payload: RegisterRequest,
    response: Response,
    db: SessionDep,
) -> AuthResponse:
    """Register a new member; the role is always ``member``."""
    user, token = auth_service.register(db, payload.username, payload.password)
    set_session_cookie(response, token)
    return _auth_response(user)


@router.post("/login", summary="Log in with username and password", response_model=AuthResponse)
async def login_user(
    payload: LoginRequest,
    response: Response,
    db: SessionDep,
) -> AuthResponse:
    """Authenticate and start a new session."""
    user, token = auth_service.login(db, payload.username, payload.password)
    set_session_cookie(response, token)
    return _auth_response(user)


@router.post("/logout", response_model=SuccessResponse)
async def logout_user(
    response: Response,
    token: SessionTokenDep,
    db: SessionDep,
) -> SuccessResponse:
    """End the current session; succeeds even without one."""
    auth_service.logout(db, token)
    clear_session_cookie(response)
    return SuccessResponse()


@router.get("/me", response_model=MeResponse)
async def get_me(
    response: Response,
    token: SessionTokenDep,
    principal: OptionalPrincipalDep,
) -> MeResponse:
    """Return the session owner; a stale cookie is silently cleared."""
    if principal is None:
        if token:
            clear_session_cookie(response)
        return MeResponse(user=None)
    return MeResponse(
        user=UserResponse(id=principal.user_id, username=principal.username, role=principal.role)
    )
