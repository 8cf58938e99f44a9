"""Book suggestion lifecycle: pending -> approved, or deleted.

Duplicate detection by work key is advisory: clients call
:func:`check_work_key_exists` before suggesting, and nothing stops two
concurrent suggestions for the same work unless ``REJECT_DUPLICATE_WORK_KEYS``
is enabled.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from sqlalchemy.orm import Session, joinedload

from bookclub.core.errors import (
    ConflictError,
    NotFoundError,
    StateError,
    ValidationError,
)
from bookclub.core.settings import settings
from bookclub.models import Book, BookSuggestion, User
from bookclub.models.book import BOOK_STATUS_UNREAD
from bookclub.models.suggestion import SUGGESTION_APPROVED, SUGGESTION_PENDING
from bookclub.services.auth_service import Principal
from bookclub.services.dates import validate_month, validate_schedule_date

logger = logging.getLogger(__name__)

DuplicateType = Literal["scheduled", "suggested"]


@dataclass(frozen=True)
class WorkKeyCheck:
    exists: bool
    type: DuplicateType | None = None
    suggested_by: str | None = None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def check_work_key_exists(db: Session, work_key: str | None) -> WorkKeyCheck:
    """Report whether a work is already scheduled/read or pending as a suggestion.

    A matching book always wins over a matching pending suggestion.
    """
    work_key = _clean(work_key)
    if work_key is None:
        return WorkKeyCheck(exists=False)

    book = db.query(Book.id).filter(Book.work_key == work_key).first()
    if book is not None:
        return WorkKeyCheck(exists=True, type="scheduled")

    suggestion = (
        db.query(BookSuggestion)
        .options(joinedload(BookSuggestion.suggester))
        .filter(
            BookSuggestion.work_key == work_key,
            BookSuggestion.status == SUGGESTION_PENDING,
        )
        .order_by(BookSuggestion.created_at.asc(), BookSuggestion.id.asc())
        .first()
    )
    if suggestion is not None:
        suggested_by = suggestion.suggester.username if suggestion.suggester else None
        return WorkKeyCheck(exists=True, type="suggested", suggested_by=suggested_by)

    return WorkKeyCheck(exists=False)


def create_suggestion(
    db: Session,
    principal: Principal,
    *,
    title: str | None,
    author: str | None = None,
    cover_url: str | None = None,
    work_key: str | None = None,
    year: int | None = None,
    description: str | None = None,
    suggested_month: str | None = None,
    suggested_by_user_id: int | None = None,
) -> int:
    """Record a new pending suggestion and return its id.

    Admins may file a suggestion on behalf of another member through
    ``suggested_by_user_id``; members may only name themselves.

    Raises:
        ValidationError: If the title is blank or the month is not ``YYYY-MM``.
        ForbiddenError: If a member names another user as suggester.
        NotFoundError: If the named suggester does not exist.
        ConflictError: If duplicate rejection is enabled and the work is known.
    """
    title = _clean(title)
    if title is None:
        raise ValidationError("Title is required")
    suggested_month = _clean(suggested_month)
    if suggested_month is not None:
        validate_month(suggested_month)

    suggester_id = suggested_by_user_id or principal.user_id
    principal.require_self_or_admin(suggester_id)
    if suggester_id != principal.user_id and db.get(User, suggester_id) is None:
        raise NotFoundError("Suggested user not found")

    work_key = _clean(work_key)
    if settings.reject_duplicate_work_keys and work_key is not None:
        duplicate = check_work_key_exists(db, work_key)
        if duplicate.exists:
            raise ConflictError(f"This book has already been {duplicate.type}")

    suggestion = BookSuggestion(
        user_id=suggester_id,
        title=title,
        author=_clean(author),
        cover_url=_clean(cover_url),
        work_key=work_key,
        year=year,
        description=_clean(description),
        suggested_month=suggested_month,
        status=SUGGESTION_PENDING,
    )
    db.add(suggestion)
    db.commit()
    db.refresh(suggestion)
    logger.info("User %s suggested %r (suggestion %s)", suggester_id, title, suggestion.id)
    return suggestion.id


def list_pending_suggestions(db: Session) -> list[BookSuggestion]:
    """Return pending suggestions, oldest first, with suggesters loaded."""
    return (
        db.query(BookSuggestion)
        .options(joinedload(BookSuggestion.suggester))
        .filter(BookSuggestion.status == SUGGESTION_PENDING)
        .order_by(BookSuggestion.created_at.asc(), BookSuggestion.id.asc())
        .all()
    )


def _get_suggestion_or_404(db: Session, suggestion_id: int) -> BookSuggestion:
    suggestion = db.get(BookSuggestion, suggestion_id)
    if suggestion is None:
        raise NotFoundError("Suggestion not found")
    return suggestion


def approve_suggestion(
    db: Session,
    principal: Principal,
    suggestion_id: int,
    scheduled_date: str | None,
) -> int:
    """Turn a pending suggestion into a scheduled book.

    The new book row and the status change are committed as one unit; on any
    failure neither is kept.

    Returns:
        The id of the created book.

    Raises:
        ForbiddenError: If the caller is not an admin.
        NotFoundError: If the suggestion does not exist.
        StateError: If the suggestion is no longer pending.
        ValidationError: If the date is not ``YYYY-MM`` or ``YYYY-MM-DD``.
    """
    principal.require_admin()
    suggestion = _get_suggestion_or_404(db, suggestion_id)
    if suggestion.status != SUGGESTION_PENDING:
        raise StateError(f"Suggestion is already {suggestion.status}")
    scheduled_date = validate_schedule_date(scheduled_date)

    book = Book(
        title=suggestion.title,
        author=suggestion.author,
        description=suggestion.description,
        cover_url=suggestion.cover_url,
        work_key=suggestion.work_key,
        status=BOOK_STATUS_UNREAD,
        read_on=scheduled_date,
        suggested_by=suggestion.user_id,
    )
    try:
        db.add(book)
        suggestion.status = SUGGESTION_APPROVED
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(book)
    logger.info(
        "Admin %s approved suggestion %s as book %s for %s",
        principal.user_id,
        suggestion_id,
        book.id,
        scheduled_date,
    )
    return book.id


def delete_suggestion(db: Session, principal: Principal, suggestion_id: int) -> None:
    """Remove a suggestion outright; this is how suggestions are rejected."""
    principal.require_admin()
    suggestion = _get_suggestion_or_404(db, suggestion_id)
    db.delete(suggestion)
    db.commit()
    logger.info("Admin %s deleted suggestion %s", principal.user_id, suggestion_id)
