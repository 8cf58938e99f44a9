# src/bookclub/models/meeting.py
"""Models capturing meeting-date availability votes."""

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from bookclub.db.session import Base

MEETING_DATE_PROPOSED = "proposed"
VOTE_YES = "yes"


class MeetingDate(Base):
    """Candidate meeting date for a book, created by the first vote for it."""

    __tablename__ = "meeting_dates"
    __table_args__ = (
        UniqueConstraint("book_id", "proposed_date", name="uq_meeting_dates_book_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Calendar date as YYYY-MM-DD text.
    proposed_date: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=MEETING_DATE_PROPOSED)


class MeetingVote(Base):
    """A member's availability for one meeting date."""

    __tablename__ = "meeting_votes"
    __table_args__ = (
        UniqueConstraint("meeting_date_id", "user_id", name="uq_meeting_votes_date_user"),
        Index("ix_meeting_votes_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    meeting_date_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("meeting_dates.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    vote: Mapped[str] = mapped_column(String(8), nullable=False, default=VOTE_YES)
