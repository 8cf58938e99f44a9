# src/bookclub/models/book.py
"""SQLAlchemy model for books that were read or are scheduled."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookclub.db.session import Base
from bookclub.db.time import utcnow

from .user import User

BOOK_STATUS_UNREAD = "unread"
BOOK_STATUS_READ = "read"
READ_ON_TBD = "TBD"


class Book(Base):
    """Canonical club book.

    ``read_on`` holds a month (``YYYY-MM``), an exact date (``YYYY-MM-DD``)
    or the placeholder ``TBD``. Status only ever moves from unread to read.
    """

    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("status IN ('read', 'unread')", name="ck_books_status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    # External work identifier used for duplicate detection; not unique.
    work_key: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=BOOK_STATUS_UNREAD)
    read_on: Mapped[str] = mapped_column(String(10), nullable=False, default=READ_ON_TBD)
    suggested_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    suggester: Mapped[User | None] = relationship("User")
