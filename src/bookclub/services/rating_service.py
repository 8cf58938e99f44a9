"""Rating submission and per-book mean aggregation."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from bookclub.core.errors import NotFoundError, ValidationError
from bookclub.db.time import utcnow
from bookclub.models import Book, Rating
from bookclub.models.rating import RATING_MAX, RATING_MIN
from bookclub.services.auth_service import Principal

logger = logging.getLogger(__name__)

_ONE_DECIMAL = Decimal("0.1")


def round_rating(value: float | Decimal) -> float:
    """Round half-up to one decimal place."""
    return float(Decimal(str(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def mean_rating(values: Iterable[int]) -> float | None:
    """Return the rounded arithmetic mean, or None for no ratings."""
    values = list(values)
    if not values:
        return None
    return round_rating(Decimal(sum(values)) / Decimal(len(values)))


def mean_ratings(db: Session) -> dict[int, float]:
    """Return ``book_id -> rounded mean`` for every book with at least one rating."""
    rows = (
        db.query(Rating.book_id, func.sum(Rating.rating), func.count(Rating.id))
        .group_by(Rating.book_id)
        .all()
    )
    return {
        book_id: round_rating(Decimal(int(total)) / Decimal(int(count)))
        for book_id, total, count in rows
        if count
    }


def get_user_rating(db: Session, user_id: int, book_id: int) -> int | None:
    """Return the user's rating for a book, or None if they have not rated it."""
    row = (
        db.query(Rating.rating)
        .filter(Rating.user_id == user_id, Rating.book_id == book_id)
        .first()
    )
    return row[0] if row else None


def _validate_rating(rating: object) -> int:
    # bool is an int subclass but not a rating.
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Rating must be an integer")
    if not RATING_MIN <= rating <= RATING_MAX:
        raise ValidationError(f"Rating must be between {RATING_MIN} and {RATING_MAX}")
    return rating


def submit_rating(
    db: Session,
    principal: Principal,
    user_id: int | None,
    book_id: int | None,
    rating: object,
) -> Rating:
    """Insert or overwrite a user's rating for a book.

    Raises:
        ValidationError: If an id is missing or the rating is outside [0, 10].
        ForbiddenError: If a member rates on behalf of someone else.
        NotFoundError: If the book does not exist.
    """
    if not user_id or not book_id or rating is None:
        raise ValidationError("Missing required fields")
    value = _validate_rating(rating)
    principal.require_self_or_admin(user_id)

    if db.get(Book, book_id) is None:
        raise NotFoundError("Book not found")

    existing = (
        db.query(Rating)
        .filter(Rating.user_id == user_id, Rating.book_id == book_id)
        .first()
    )
    if existing is None:
        existing = Rating(user_id=user_id, book_id=book_id, rating=value)
        db.add(existing)
    else:
        existing.rating = value
        existing.updated_at = utcnow()

    db.commit()
    db.refresh(existing)
    logger.info("User %s rated book %s", user_id, book_id)
    return existing
