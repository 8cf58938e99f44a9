"""Book metadata search Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class BookLookupResponse(BaseModel):
    title: str
    author: str | None = None
    cover_url: str | None = Field(None, serialization_alias="coverUrl")
    year: int | None = None
    work_key: str = Field(..., serialization_alias="workKey")

    model_config = ConfigDict(from_attributes=True)


class SearchResponse(BaseModel):
    results: list[BookLookupResponse]


class DescriptionResponse(BaseModel):
    description: str | None
