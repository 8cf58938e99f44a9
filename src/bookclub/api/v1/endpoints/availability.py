# src/bookclub/api/v1/endpoints/availability.py
"""Meeting-date availability endpoints."""

from fastapi import APIRouter, Query

from bookclub.api.v1.dependencies import PrincipalDep, SessionDep
from bookclub.schemas.availability import (
    AvailabilitySubmit,
    DateCountListResponse,
    DateCountResponse,
    DateVotersListResponse,
    DateVotersResponse,
    PeakResponse,
    UserDatesResponse,
)
from bookclub.schemas.common import SuccessResponse
from bookclub.services import availability_service, peak
from bookclub.services.dates import validate_month

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("/{book_id}", response_model=DateCountListResponse)
async def get_availability(book_id: int, db: SessionDep) -> DateCountListResponse:
    """Get vote counts per proposed date."""
    counts = availability_service.get_votes_for_book(db, book_id)
    return DateCountListResponse(dates=[DateCountResponse.model_validate(c) for c in counts])


@router.get("/{book_id}/details", response_model=DateVotersListResponse)
async def get_availability_details(book_id: int, db: SessionDep) -> DateVotersListResponse:
    """Get the voters behind every proposed date."""
    details = availability_service.get_votes_for_book_with_voters(db, book_id)
    return DateVotersListResponse(dates=[DateVotersResponse.model_validate(d) for d in details])


@router.get("/{book_id}/peak", response_model=PeakResponse)
async def get_availability_peak(
    book_id: int,
    db: SessionDep,
    month: str | None = Query(None, description="Restrict to one YYYY-MM month"),
) -> PeakResponse:
    """Get the most popular dates; none when every count is zero."""
    if month:
        validate_month(month)
    max_count, dates = peak(availability_service.get_vote_counts(db, book_id), month)
    return PeakResponse(max_count=max_count, dates=dates)


@router.get("/{book_id}/user/{user_id}", response_model=UserDatesResponse)
async def get_user_availability(book_id: int, user_id: int, db: SessionDep) -> UserDatesResponse:
    """Get the dates one user marked as available."""
    return UserDatesResponse(dates=availability_service.get_user_votes(db, book_id, user_id))


@router.post("", response_model=SuccessResponse)
async def submit_availability(
    payload: AvailabilitySubmit,
    principal: PrincipalDep,
    db: SessionDep,
) -> SuccessResponse:
    """Replace the caller's available dates for a book."""
    availability_service.submit_availability(
        db,
        principal,
        payload.user_id or principal.user_id,
        payload.book_id,
        payload.dates,
    )
    return SuccessResponse()
