"""Member directory endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from bookclub.api.v1.dependencies import SessionDep
from bookclub.schemas.user import UserListResponse, UserSummary
from bookclub.services import auth_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(db: SessionDep) -> UserListResponse:
    """List members alphabetically for the suggest-on-behalf picker."""
    users = auth_service.list_users(db)
    return UserListResponse(
        users=[UserSummary(id=user.id, name=user.username, email=user.username) for user in users]
    )
