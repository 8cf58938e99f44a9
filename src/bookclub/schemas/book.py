"""Book-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class BookResponse(BaseModel):
    """A book with its mean rating and suggester's username."""

    id: int
    title: str
    author: str | None = None
    description: str | None = None
    cover_url: str | None = None
    work_key: str | None = None
    status: Literal["read", "unread"]
    read_on: str
    suggested_by: int | None = None
    rating: float | None = Field(None, description="Mean rating rounded to one decimal")
    suggested_by_name: str | None = Field(None, serialization_alias="suggestedBy")


class PendingSuggestionResponse(BaseModel):
    """A suggestion awaiting admin review."""

    id: int
    title: str
    author: str | None = None
    description: str | None = None
    cover_url: str | None = None
    work_key: str | None = None
    year: int | None = None
    user_id: int
    suggested_month: str | None = None
    created_at: datetime
    suggested_by_name: str | None = Field(None, serialization_alias="suggestedBy")

    model_config = ConfigDict(from_attributes=True)


class BookListResponse(BaseModel):
    books: list[BookResponse]
    pending_suggestions: list[PendingSuggestionResponse] = Field(
        default_factory=list, serialization_alias="pendingSuggestions"
    )


class WorkKeyCheckResponse(BaseModel):
    """Result of the duplicate work-key check."""

    exists: bool
    type: Literal["scheduled", "suggested"] | None = None
    suggested_by: str | None = Field(None, serialization_alias="suggestedBy")


class ScheduleRequest(BaseModel):
    """Body for rescheduling a book."""

    scheduled_date: str | None = Field(None, alias="scheduledDate")

    model_config = ConfigDict(populate_by_name=True)
