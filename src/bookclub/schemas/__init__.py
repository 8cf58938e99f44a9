# src/bookclub/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

Request bodies accept the camelCase keys used by the web client.
"""

from .availability import AvailabilitySubmit, DateCountResponse, DateVotersResponse
from .book import BookListResponse, BookResponse, ScheduleRequest, WorkKeyCheckResponse
from .common import SuccessResponse
from .rating import RatingResponse, RatingSubmit
from .suggestion import ApproveRequest, SuggestionCreate, SuggestionResponse
from .user import LoginRequest, RegisterRequest, UserResponse

__all__ = [
    "AvailabilitySubmit", "DateCountResponse", "DateVotersResponse",
    "BookListResponse", "BookResponse", "ScheduleRequest", "WorkKeyCheckResponse",
    "SuccessResponse",
    "RatingResponse", "RatingSubmit",
    "ApproveRequest", "SuggestionCreate", "SuggestionResponse",
    "LoginRequest", "RegisterRequest", "UserResponse",
]
