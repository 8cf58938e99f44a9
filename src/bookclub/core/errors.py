"""Domain errors raised by book club services.

Every error carries the HTTP status the API layer reports it with; the
exception handlers in ``bookclub.main`` render them as ``{"error": message}``.
"""

from __future__ import annotations


class BookClubError(RuntimeError):
    """Base exception for all book club domain failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BookClubError):
    """Raised when input is missing or malformed."""

    status_code = 400


class AuthError(BookClubError):
    """Raised when a session is missing, invalid or expired, or credentials are wrong."""

    status_code = 401


class ForbiddenError(BookClubError):
    """Raised when an authenticated caller lacks the required role."""

    status_code = 403


class NotFoundError(BookClubError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ConflictError(BookClubError):
    """Raised when a uniqueness rule would be violated."""

    status_code = 409


class StateError(BookClubError):
    """Raised when an entity is not in the state an operation requires."""

    status_code = 409


class StorageError(BookClubError):
    """Raised when the underlying persistence layer fails."""

    status_code = 500


class LookupServiceError(BookClubError):
    """Raised when the external book metadata service cannot be reached."""

    status_code = 502
