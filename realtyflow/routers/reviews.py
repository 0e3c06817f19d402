"""
Review endpoints.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional, List
from uuid import UUID

from realtyflow.models.user import User
from realtyflow.schemas.review import ReviewCreate, ReviewResponse
from realtyflow.schemas.error import get_common_error_responses, get_lookup_error_responses
from realtyflow.services.review import ReviewService
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.dependencies import get_current_claim, get_current_user, get_review_service


router = APIRouter(prefix="/reviews", tags=["Reviews"])


def _to_response(review) -> ReviewResponse:
    return ReviewResponse.model_validate(review.to_dict())


@router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post review",
    responses=get_lookup_error_responses()
)
async def create_review(
    review_data: ReviewCreate,
    claim: IdentityClaim = Depends(get_current_claim),
    reviewer: Optional[User] = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service)
) -> ReviewResponse:
    review = await review_service.create(review_data, claim, reviewer)
    return _to_response(review)


@router.get(
    "",
    response_model=List[ReviewResponse],
    summary="Latest reviews"
)
async def list_latest_reviews(
    limit: int = Query(10, ge=1, le=100, description="Maximum number of reviews"),
    review_service: ReviewService = Depends(get_review_service)
) -> List[ReviewResponse]:
    return [_to_response(review) for review in await review_service.list_latest(limit)]


@router.get(
    "/property/{property_id}",
    response_model=List[ReviewResponse],
    summary="Reviews of a property",
    responses=get_common_error_responses()
)
async def list_property_reviews(
    property_id: UUID = Path(..., description="Property ID"),
    claim: IdentityClaim = Depends(get_current_claim),
    review_service: ReviewService = Depends(get_review_service)
) -> List[ReviewResponse]:
    return [_to_response(review) for review in await review_service.list_by_property(property_id)]


@router.get(
    "/{email}",
    response_model=List[ReviewResponse],
    summary="Reviews by a reviewer",
    responses=get_common_error_responses()
)
async def list_reviewer_reviews(
    email: str = Path(..., description="Reviewer email"),
    claim: IdentityClaim = Depends(get_current_claim),
    review_service: ReviewService = Depends(get_review_service)
) -> List[ReviewResponse]:
    return [_to_response(review) for review in await review_service.list_by_reviewer(email)]


@router.delete(
    "/{review_id}",
    summary="Delete review",
    description="The reviewer or an admin only. Reviews cannot be edited.",
    responses=get_lookup_error_responses()
)
async def delete_review(
    review_id: UUID = Path(..., description="Review ID"),
    claim: IdentityClaim = Depends(get_current_claim),
    viewer: Optional[User] = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service)
) -> dict:
    deleted = await review_service.delete(review_id, claim, viewer)
    return {"deleted": deleted, "id": str(review_id)}
