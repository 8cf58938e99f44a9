# src/bookclub/api/v1/endpoints/ratings.py
"""Rating endpoints for the book club API."""

from fastapi import APIRouter

from bookclub.api.v1.dependencies import PrincipalDep, SessionDep
from bookclub.schemas.common import SuccessResponse
from bookclub.schemas.rating import RatingResponse, RatingSubmit
from bookclub.services import rating_service

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.get("/{user_id}/{book_id}", response_model=RatingResponse)
async def get_rating(user_id: int, book_id: int, db: SessionDep) -> RatingResponse:
    """Get a user's rating of a book, or null."""
    return RatingResponse(rating=rating_service.get_user_rating(db, user_id, book_id))


@router.post("", response_model=SuccessResponse)
async def submit_rating(
    payload: RatingSubmit,
    principal: PrincipalDep,
    db: SessionDep,
) -> SuccessResponse:
    """Rate a book from 0 to 10, replacing any earlier rating."""
    rating_service.submit_rating(
        db,
        principal,
        payload.user_id or principal.user_id,
        payload.book_id,
        payload.rating,
    )
    return SuccessResponse()
