"""Canonical book list and admin schedule mutations."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import case, delete, select
from sqlalchemy.orm import Session, joinedload

from bookclub.core.errors import NotFoundError, ValidationError
from bookclub.models import Book, BookSuggestion, MeetingDate, MeetingVote, Rating
from bookclub.models.book import BOOK_STATUS_READ, BOOK_STATUS_UNREAD, READ_ON_TBD
from bookclub.services.auth_service import Principal
from bookclub.services.dates import validate_schedule_date
from bookclub.services.rating_service import mean_ratings
from bookclub.services.suggestion_service import list_pending_suggestions

logger = logging.getLogger(__name__)


@dataclass
class BookView:
    """A book together with its aggregate rating and suggester name."""

    book: Book
    rating: float | None
    suggested_by_name: str | None


@dataclass
class BookListing:
    read: list[BookView] = field(default_factory=list)
    upcoming: list[BookView] = field(default_factory=list)
    pending_suggestions: list[BookSuggestion] = field(default_factory=list)

    @property
    def books(self) -> list[BookView]:
        return self.read + self.upcoming


def list_books(db: Session) -> BookListing:
    """Return read and upcoming books ordered by schedule, plus pending suggestions."""
    # "TBD" sorts after every real date.
    tbd_last = case((Book.read_on == READ_ON_TBD, 1), else_=0)
    books = (
        db.query(Book)
        .options(joinedload(Book.suggester))
        .order_by(tbd_last, Book.read_on.asc(), Book.id.asc())
        .all()
    )
    ratings = mean_ratings(db)

    listing = BookListing(pending_suggestions=list_pending_suggestions(db))
    for book in books:
        view = BookView(
            book=book,
            rating=ratings.get(book.id),
            suggested_by_name=book.suggester.username if book.suggester else None,
        )
        if book.status == BOOK_STATUS_READ:
            listing.read.append(view)
        else:
            listing.upcoming.append(view)
    return listing


def _get_book_or_404(db: Session, book_id: int) -> Book:
    book = db.get(Book, book_id)
    if book is None:
        raise NotFoundError("Book not found")
    return book


def create_book(
    db: Session,
    principal: Principal,
    *,
    title: str,
    author: str | None = None,
    description: str | None = None,
    cover_url: str | None = None,
    work_key: str | None = None,
    read_on: str = READ_ON_TBD,
    status: str = BOOK_STATUS_UNREAD,
    suggested_by: int | None = None,
) -> Book:
    """Insert a book directly, bypassing the suggestion flow."""
    principal.require_admin()
    if not title or not title.strip():
        raise ValidationError("Title is required")
    if status not in (BOOK_STATUS_READ, BOOK_STATUS_UNREAD):
        raise ValidationError(f"Unknown status: {status}")
    book = Book(
        title=title.strip(),
        author=author,
        description=description,
        cover_url=cover_url,
        work_key=work_key,
        status=status,
        read_on=validate_schedule_date(read_on, allow_tbd=True),
        suggested_by=suggested_by,
    )
    db.add(book)
    db.commit()
    db.refresh(book)
    logger.info("Admin %s created book %s", principal.user_id, book.id)
    return book


def mark_as_read(db: Session, principal: Principal, book_id: int) -> Book:
    """Move a book to ``read``; repeating the call changes nothing."""
    principal.require_admin()
    book = _get_book_or_404(db, book_id)
    book.status = BOOK_STATUS_READ
    db.commit()
    logger.info("Admin %s marked book %s as read", principal.user_id, book_id)
    return book


def reschedule(db: Session, principal: Principal, book_id: int, new_date: str | None) -> Book:
    """Change a book's scheduled month or date; ``TBD`` is accepted."""
    principal.require_admin()
    new_date = validate_schedule_date(new_date, allow_tbd=True)
    book = _get_book_or_404(db, book_id)
    book.read_on = new_date
    db.commit()
    logger.info("Admin %s rescheduled book %s to %s", principal.user_id, book_id, new_date)
    return book


def delete_book(db: Session, principal: Principal, book_id: int) -> None:
    """Delete a book together with its ratings, meeting dates and votes."""
    principal.require_admin()
    book = _get_book_or_404(db, book_id)
    date_ids = select(MeetingDate.id).where(MeetingDate.book_id == book_id)
    try:
        db.execute(
            delete(MeetingVote)
            .where(MeetingVote.meeting_date_id.in_(date_ids))
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(MeetingDate)
            .where(MeetingDate.book_id == book_id)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(Rating)
            .where(Rating.book_id == book_id)
            .execution_options(synchronize_session=False)
        )
        db.delete(book)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Admin %s deleted book %s", principal.user_id, book_id)
