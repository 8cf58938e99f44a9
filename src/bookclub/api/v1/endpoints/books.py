# src/bookclub/api/v1/endpoints/books.py
"""Book listing and admin schedule endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from bookclub.api.v1.dependencies import AdminDep, SessionDep
from bookclub.models import BookSuggestion
from bookclub.schemas.book import (
    BookListResponse,
    BookResponse,
    PendingSuggestionResponse,
    ScheduleRequest,
    WorkKeyCheckResponse,
)
from bookclub.schemas.common import SuccessResponse
from bookclub.services import book_service, suggestion_service
from bookclub.services.book_service import BookView

router = APIRouter(prefix="/books", tags=["books"])


def _to_book_response(view: BookView) -> BookResponse:
    book = view.book
    return BookResponse(
        id=book.id,
        title=book.title,
        author=book.author,
        description=book.description,
        cover_url=book.cover_url,
        work_key=book.work_key,
        status=book.status,
        read_on=book.read_on,
        suggested_by=book.suggested_by,
        rating=view.rating,
        suggested_by_name=view.suggested_by_name,
    )


def _to_pending_response(suggestion: BookSuggestion) -> PendingSuggestionResponse:
    response = PendingSuggestionResponse.model_validate(suggestion)
    response.suggested_by_name = suggestion.suggester.username if suggestion.suggester else None
    return response


@router.get("", response_model=BookListResponse)
async def list_books(db: SessionDep) -> BookListResponse:
    """Return read and upcoming books plus pending suggestions."""
    listing = book_service.list_books(db)
    return BookListResponse(
        books=[_to_book_response(view) for view in listing.books],
        pending_suggestions=[_to_pending_response(s) for s in listing.pending_suggestions],
    )


@router.get("/check-work", response_model=WorkKeyCheckResponse)
async def check_work(
    db: SessionDep,
    work_key: str | None = Query(None, alias="workKey"),
) -> WorkKeyCheckResponse:
    """Report whether a work is already scheduled or suggested."""
    result = suggestion_service.check_work_key_exists(db, work_key)
    return WorkKeyCheckResponse(
        exists=result.exists,
        type=result.type,
        suggested_by=result.suggested_by,
    )


@router.put("/{book_id}/mark-read", response_model=SuccessResponse)
async def mark_read(book_id: int, admin: AdminDep, db: SessionDep) -> SuccessResponse:
    """Mark a book as read (admin only)."""
    book_service.mark_as_read(db, admin, book_id)
    return SuccessResponse()


@router.put("/{book_id}/schedule", response_model=SuccessResponse)
async def schedule_book(
    book_id: int,
    payload: ScheduleRequest,
    admin: AdminDep,
    db: SessionDep,
) -> SuccessResponse:
    """Change a book's scheduled month or date (admin only)."""
    book_service.reschedule(db, admin, book_id, payload.scheduled_date)
    return SuccessResponse()


@router.delete("/{book_id}", response_model=SuccessResponse)
async def delete_book(book_id: int, admin: AdminDep, db: SessionDep) -> SuccessResponse:
    """Delete a book and its ratings and availability votes (admin only)."""
    book_service.delete_book(db, admin, book_id)
    return SuccessResponse()
