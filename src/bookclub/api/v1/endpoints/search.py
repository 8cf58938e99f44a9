# src/bookclub/api/v1/endpoints/search.py
"""Book metadata search proxied to Open Library."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from bookclub.core.errors import ValidationError
from bookclub.schemas.search import BookLookupResponse, DescriptionResponse, SearchResponse
from bookclub.services.open_library import OpenLibraryClient, get_open_library_client

router = APIRouter(prefix="/search", tags=["search"])


def get_lookup_client_dep() -> OpenLibraryClient:
    """Return the shared Open Library client."""
    return get_open_library_client()


LookupClientDep = Annotated[OpenLibraryClient, Depends(get_lookup_client_dep)]


@router.get("", response_model=SearchResponse)
async def search_books(
    client: LookupClientDep,
    q: str = Query("", description="Title or author text"),
    limit: int = Query(3, ge=1, le=20),
) -> SearchResponse:
    """Search for works to suggest."""
    results = await client.search(q, limit=limit)
    return SearchResponse(results=[BookLookupResponse.model_validate(r) for r in results])


@router.get("/description", response_model=DescriptionResponse)
async def get_description(
    client: LookupClientDep,
    work_key: str | None = Query(None, alias="workKey"),
) -> DescriptionResponse:
    """Fetch the description of a work by its key."""
    if not work_key:
        raise ValidationError("workKey is required")
    return DescriptionResponse(description=await client.fetch_description(work_key))
