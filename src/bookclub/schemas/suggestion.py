"""Suggestion-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SuggestionCreate(BaseModel):
    """Schema for suggesting a book."""

    title: str | None = None
    author: str | None = None
    cover_url: str | None = Field(None, alias="coverUrl")
    work_key: str | None = Field(None, alias="workKey")
    year: int | None = None
    description: str | None = None
    suggested_month: str | None = Field(
        None, alias="suggestedMonth", description="Preferred month as YYYY-MM"
    )
    suggested_by_user_id: int | None = Field(
        None,
        alias="suggestedByUserId",
        description="Admins may suggest on behalf of another member",
    )

    model_config = ConfigDict(populate_by_name=True)


class SuggestionResponse(BaseModel):
    success: bool = True
    suggestion_id: int = Field(..., serialization_alias="suggestionId")


class ApproveRequest(BaseModel):
    """Body for approving a suggestion."""

    scheduled_date: str | None = Field(None, alias="scheduledDate")

    model_config = ConfigDict(populate_by_name=True)


class ApproveResponse(BaseModel):
    success: bool = True
    book_id: int = Field(..., serialization_alias="bookId")
