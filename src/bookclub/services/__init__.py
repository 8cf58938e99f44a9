# src/bookclub/services/__init__.py
"""Business logic services for the book club application."""

from .auth_service import Principal
from .open_library import BookLookup, OpenLibraryClient
from .tally import adjusted_count, adjusted_counts, peak

__all__ = [
    "Principal",
    "BookLookup",
    "OpenLibraryClient",
    "adjusted_count",
    "adjusted_counts",
    "peak",
]
