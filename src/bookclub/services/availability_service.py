"""Meeting-date availability votes.

A user's submission for a book replaces all of their earlier votes for that
book. Dates are created lazily by the first vote that names them and stay
listed (with a zero count) after their last vote is withdrawn.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from bookclub.core.errors import NotFoundError, ValidationError
from bookclub.models import Book, MeetingDate, MeetingVote, User
from bookclub.models.meeting import MEETING_DATE_PROPOSED, VOTE_YES
from bookclub.services.auth_service import Principal
from bookclub.services.dates import validate_meeting_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateCount:
    id: int
    proposed_date: str
    vote_count: int


@dataclass(frozen=True)
class Voter:
    id: int
    username: str


@dataclass
class DateVoters:
    proposed_date: str
    users: list[Voter] = field(default_factory=list)


def get_votes_for_book(db: Session, book_id: int) -> list[DateCount]:
    """Return every meeting date of a book with its vote count, oldest first."""
    rows = (
        db.query(MeetingDate.id, MeetingDate.proposed_date, func.count(MeetingVote.id))
        .outerjoin(MeetingVote, MeetingVote.meeting_date_id == MeetingDate.id)
        .filter(MeetingDate.book_id == book_id)
        .group_by(MeetingDate.id, MeetingDate.proposed_date)
        .order_by(MeetingDate.proposed_date)
        .all()
    )
    return [DateCount(id=row[0], proposed_date=row[1], vote_count=int(row[2])) for row in rows]


def get_vote_counts(db: Session, book_id: int) -> dict[str, int]:
    """Return ``proposed_date -> count`` for a book."""
    return {item.proposed_date: item.vote_count for item in get_votes_for_book(db, book_id)}


def get_votes_for_book_with_voters(db: Session, book_id: int) -> list[DateVoters]:
    """Return every meeting date of a book with the users who voted for it."""
    rows = (
        db.query(MeetingDate.proposed_date, User.id, User.username)
        .outerjoin(MeetingVote, MeetingVote.meeting_date_id == MeetingDate.id)
        .outerjoin(User, User.id == MeetingVote.user_id)
        .filter(MeetingDate.book_id == book_id)
        .order_by(MeetingDate.proposed_date, User.username)
        .all()
    )
    grouped: dict[str, DateVoters] = {}
    for proposed_date, user_id, username in rows:
        entry = grouped.setdefault(proposed_date, DateVoters(proposed_date=proposed_date))
        if user_id is not None and username is not None:
            entry.users.append(Voter(id=user_id, username=username))
    return list(grouped.values())


def get_user_votes(db: Session, book_id: int, user_id: int) -> list[str]:
    """Return the dates a user marked as available for a book."""
    rows = (
        db.query(MeetingDate.proposed_date)
        .join(MeetingVote, MeetingVote.meeting_date_id == MeetingDate.id)
        .filter(MeetingDate.book_id == book_id, MeetingVote.user_id == user_id)
        .order_by(MeetingDate.proposed_date)
        .all()
    )
    return [row[0] for row in rows]


def _get_or_create_meeting_date(db: Session, book_id: int, proposed_date: str) -> MeetingDate:
    meeting_date = (
        db.query(MeetingDate)
        .filter(MeetingDate.book_id == book_id, MeetingDate.proposed_date == proposed_date)
        .first()
    )
    if meeting_date is None:
        meeting_date = MeetingDate(
            book_id=book_id,
            proposed_date=proposed_date,
            status=MEETING_DATE_PROPOSED,
        )
        db.add(meeting_date)
        db.flush()
    return meeting_date


def submit_availability(
    db: Session,
    principal: Principal,
    user_id: int | None,
    book_id: int | None,
    dates: Iterable[object] | None,
) -> list[str]:
    """Replace a user's availability votes for a book.

    The delete and the inserts are committed together, so submitting the same
    set twice leaves the same state behind.

    Returns:
        The normalized, de-duplicated dates that were stored.

    Raises:
        ValidationError: If a field is missing or a date is malformed.
        ForbiddenError: If a member submits for someone else.
        NotFoundError: If the book does not exist.
    """
    if not user_id or not book_id or dates is None or isinstance(dates, str):
        raise ValidationError("Missing required fields")
    selected = sorted({validate_meeting_date(value) for value in dates})
    principal.require_self_or_admin(user_id)

    if db.get(Book, book_id) is None:
        raise NotFoundError("Book not found")

    try:
        book_date_ids = select(MeetingDate.id).where(MeetingDate.book_id == book_id)
        db.execute(
            delete(MeetingVote)
            .where(
                MeetingVote.user_id == user_id,
                MeetingVote.meeting_date_id.in_(book_date_ids),
            )
            .execution_options(synchronize_session=False)
        )
        for proposed_date in selected:
            meeting_date = _get_or_create_meeting_date(db, book_id, proposed_date)
            db.add(MeetingVote(meeting_date_id=meeting_date.id, user_id=user_id, vote=VOTE_YES))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "User %s submitted %d available dates for book %s", user_id, len(selected), book_id
    )
    return selected
