"""Rating-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class RatingSubmit(BaseModel):
    """Schema for rating a book; ``userId`` defaults to the caller."""

    user_id: int | None = Field(None, alias="userId")
    book_id: int | None = Field(None, alias="bookId")
    rating: StrictInt | None = Field(None, description="Integer from 0 to 10")

    model_config = ConfigDict(populate_by_name=True)


class RatingResponse(BaseModel):
    rating: int | None
