# src/bookclub/api/v1/endpoints/suggestions.py
"""Book suggestion endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from bookclub.api.v1.dependencies import AdminDep, PrincipalDep, SessionDep
from bookclub.schemas.common import SuccessResponse
from bookclub.schemas.suggestion import (
    ApproveRequest,
    ApproveResponse,
    SuggestionCreate,
    SuggestionResponse,
)
from bookclub.services import suggestion_service

router = APIRouter(prefix="/book-suggestions", tags=["suggestions"])


@router.post("", response_model=SuggestionResponse)
async def create_suggestion(
    payload: SuggestionCreate,
    principal: PrincipalDep,
    db: SessionDep,
) -> SuggestionResponse:
    """Suggest a book; it stays pending until an admin approves it."""
    suggestion_id = suggestion_service.create_suggestion(
        db,
        principal,
        title=payload.title,
        author=payload.author,
        cover_url=payload.cover_url,
        work_key=payload.work_key,
        year=payload.year,
        description=payload.description,
        suggested_month=payload.suggested_month,
        suggested_by_user_id=payload.suggested_by_user_id,
    )
    return SuggestionResponse(suggestion_id=suggestion_id)


@router.post("/{suggestion_id}/approve", response_model=ApproveResponse)
async def approve_suggestion(
    suggestion_id: int,
    payload: ApproveRequest,
    admin: AdminDep,
    db: SessionDep,
) -> ApproveResponse:
    """Schedule a pending suggestion as a book (admin only)."""
    book_id = suggestion_service.approve_suggestion(
        db, admin, suggestion_id, payload.scheduled_date
    )
    return ApproveResponse(book_id=book_id)


@router.delete("/{suggestion_id}", response_model=SuccessResponse)
async def delete_suggestion(
    suggestion_id: int,
    admin: AdminDep,
    db: SessionDep,
) -> SuccessResponse:
    """Reject and remove a suggestion (admin only)."""
    suggestion_service.delete_suggestion(db, admin, suggestion_id)
    return SuccessResponse()
