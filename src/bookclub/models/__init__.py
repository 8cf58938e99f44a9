# src/bookclub/models/__init__.py
"""SQLAlchemy models for the book club application."""

from .book import Book
from .meeting import MeetingDate, MeetingVote
from .rating import Rating
from .suggestion import BookSuggestion
from .user import User, UserSession

__all__ = [
    "Book",
    "BookSuggestion",
    "MeetingDate", "MeetingVote",
    "Rating",
    "User", "UserSession",
]
