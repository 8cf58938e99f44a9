"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Acknowledgement returned by mutations without a richer payload."""

    success: bool = Field(True, description="Always true when the request succeeded")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable error message")
