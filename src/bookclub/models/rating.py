# src/bookclub/models/rating.py
"""Per-member ratings of books."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from bookclub.db.session import Base
from bookclub.db.time import utcnow

RATING_MIN = 0
RATING_MAX = 10


class Rating(Base):
    """One rating per member and book; resubmission overwrites it."""

    __tablename__ = "ratings"
    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 10", name="ck_ratings_range"),
        UniqueConstraint("user_id", "book_id", name="uq_ratings_user_book"),
        Index("ix_ratings_book_id", "book_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
    )
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
