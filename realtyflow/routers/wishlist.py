"""
Wishlist endpoints. Entries are owned by the caller and returned joined with
the current state of the bookmarked property.
"""

from fastapi import APIRouter, Depends, Path, status
from typing import List
from uuid import UUID

from realtyflow.schemas.property import PropertyResponse
from realtyflow.schemas.wishlist import (
    WishlistCreate,
    WishlistEntryResponse,
    WishlistItemResponse,
    WishlistDeleteResponse,
)
from realtyflow.schemas.error import get_common_error_responses, get_lookup_error_responses
from realtyflow.services.wishlist import WishlistService, WishlistItem
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.dependencies import get_current_claim, get_wishlist_service


router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


def _to_item(item: WishlistItem) -> WishlistItemResponse:
    entry, property_obj = item
    return WishlistItemResponse(
        **entry.to_dict(),
        property=PropertyResponse.model_validate(property_obj.to_dict()) if property_obj else None
    )


@router.post(
    "",
    response_model=WishlistEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add to wishlist",
    responses=get_lookup_error_responses()
)
async def add_to_wishlist(
    wishlist_data: WishlistCreate,
    claim: IdentityClaim = Depends(get_current_claim),
    wishlist_service: WishlistService = Depends(get_wishlist_service)
) -> WishlistEntryResponse:
    entry = await wishlist_service.add(wishlist_data.property_id, claim)
    return WishlistEntryResponse.model_validate(entry.to_dict())


@router.get(
    "/offer/{entry_id}",
    response_model=WishlistItemResponse,
    summary="Get wishlist entry",
    description="A single entry joined with its property, used to prefill an offer.",
    responses=get_lookup_error_responses()
)
async def get_wishlist_item(
    entry_id: UUID = Path(..., description="Wishlist entry ID"),
    claim: IdentityClaim = Depends(get_current_claim),
    wishlist_service: WishlistService = Depends(get_wishlist_service)
) -> WishlistItemResponse:
    return _to_item(await wishlist_service.get_item(entry_id, claim))


@router.get(
    "/{email}",
    response_model=List[WishlistItemResponse],
    summary="List wishlist",
    description="Entries whose property was deleted are returned with property set to null.",
    responses=get_common_error_responses()
)
async def list_wishlist(
    email: str = Path(..., description="Owner email; must be the caller's"),
    claim: IdentityClaim = Depends(get_current_claim),
    wishlist_service: WishlistService = Depends(get_wishlist_service)
) -> List[WishlistItemResponse]:
    return [_to_item(item) for item in await wishlist_service.list_for_user(email, claim)]


@router.delete(
    "/{entry_id}",
    response_model=WishlistDeleteResponse,
    summary="Remove from wishlist",
    responses=get_lookup_error_responses()
)
async def remove_from_wishlist(
    entry_id: UUID = Path(..., description="Wishlist entry ID"),
    claim: IdentityClaim = Depends(get_current_claim),
    wishlist_service: WishlistService = Depends(get_wishlist_service)
) -> WishlistDeleteResponse:
    deleted = await wishlist_service.remove(entry_id, claim)
    return WishlistDeleteResponse(deleted=deleted, id=str(entry_id))
