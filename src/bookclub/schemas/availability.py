"""Availability vote Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class AvailabilitySubmit(BaseModel):
    """Full replacement of a user's available dates for a book."""

    user_id: int | None = Field(None, alias="userId")
    book_id: int | None = Field(None, alias="bookId")
    dates: list[str] | None = Field(None, description="Dates as YYYY-MM-DD")

    model_config = ConfigDict(populate_by_name=True)


class DateCountResponse(BaseModel):
    id: int
    proposed_date: str
    vote_count: int

    model_config = ConfigDict(from_attributes=True)


class DateCountListResponse(BaseModel):
    dates: list[DateCountResponse]


class VoterResponse(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class DateVotersResponse(BaseModel):
    proposed_date: str
    users: list[VoterResponse]

    model_config = ConfigDict(from_attributes=True)


class DateVotersListResponse(BaseModel):
    dates: list[DateVotersResponse]


class UserDatesResponse(BaseModel):
    dates: list[str]


class PeakResponse(BaseModel):
    """Dates holding the highest vote count, optionally within one month."""

    max_count: int = Field(..., serialization_alias="maxCount")
    dates: list[str]
