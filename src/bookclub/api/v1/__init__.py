# src/bookclub/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    availability_router,
    books_router,
    ratings_router,
    search_router,
    suggestions_router,
    users_router,
)

__all__ = [
    "auth_router",
    "availability_router",
    "books_router",
    "ratings_router",
    "search_router",
    "suggestions_router",
    "users_router",
]
