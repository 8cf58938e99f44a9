# src/bookclub/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .availability import router as availability_router
from .books import router as books_router
from .ratings import router as ratings_router
from .search import router as search_router
from .suggestions import router as suggestions_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "availability_router",
    "books_router",
    "ratings_router",
    "search_router",
    "suggestions_router",
    "users_router",
]
