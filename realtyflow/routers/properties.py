"""
Property listing endpoints: public verified listing, agent management, and
admin verification.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional, List
from uuid import UUID

from realtyflow.models.user import User
from realtyflow.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    VerificationUpdate,
    PropertyResponse,
    PropertyDeleteResponse,
)
from realtyflow.schemas.error import (
    get_common_error_responses,
    get_lookup_error_responses,
    get_transition_error_responses,
)
from realtyflow.services.property import PropertyService
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.dependencies import (
    get_current_claim,
    get_current_user,
    get_property_service,
    require_admin,
    require_agent,
)


router = APIRouter(tags=["Properties"])


def _to_response(property_obj) -> PropertyResponse:
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.get(
    "/properties",
    response_model=List[PropertyResponse],
    summary="List all properties",
    description="Every listing regardless of verification status. Admin only.",
    responses=get_common_error_responses()
)
async def list_all_properties(
    admin: User = Depends(require_admin),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    return [_to_response(prop) for prop in await property_service.list_all()]


@router.get(
    "/all-properties",
    response_model=List[PropertyResponse],
    summary="List verified properties",
    description="Verified listings, optionally filtered by location and sorted by minimum price.",
    responses=get_common_error_responses()
)
async def list_verified_properties(
    search: Optional[str] = Query(None, description="Case-insensitive location substring"),
    sort: bool = Query(False, description="Sort ascending by minimum price"),
    claim: IdentityClaim = Depends(get_current_claim),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.list_verified(search=search or None, sort_by_price=sort)
    return [_to_response(prop) for prop in properties]


@router.post(
    "/properties",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Create a listing for the calling agent. New listings start as Pending.",
    responses=get_common_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    agent: User = Depends(require_agent),
    claim: IdentityClaim = Depends(get_current_claim),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.create_property(property_data, claim)
    return _to_response(property_obj)


@router.get(
    "/properties/{email}",
    response_model=List[PropertyResponse],
    summary="List own properties",
    description="Every listing of the calling agent, in any verification status.",
    responses=get_common_error_responses()
)
async def list_agent_properties(
    email: str = Path(..., description="Agent email; must be the caller's"),
    agent: User = Depends(require_agent),
    claim: IdentityClaim = Depends(get_current_claim),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    return [_to_response(prop) for prop in await property_service.list_by_agent(email, claim)]


@router.get(
    "/property/{property_id}",
    response_model=PropertyResponse,
    summary="Get property",
    description="Unverified listings are only visible to their agent and to admins.",
    responses=get_lookup_error_responses()
)
async def get_property(
    property_id: UUID = Path(..., description="Property ID"),
    claim: IdentityClaim = Depends(get_current_claim),
    viewer: Optional[User] = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_property(property_id, viewer, claim)
    return _to_response(property_obj)


@router.patch(
    "/property/status/{property_id}",
    response_model=PropertyResponse,
    summary="Verify or reject property",
    description="Admin only. Pending listings move to Verified or Rejected; decided listings cannot change.",
    responses=get_transition_error_responses()
)
async def set_verification_status(
    status_data: VerificationUpdate,
    property_id: UUID = Path(..., description="Property ID"),
    admin: User = Depends(require_admin),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.set_verification_status(property_id, status_data.verification_status)
    return _to_response(property_obj)


@router.patch(
    "/property/{property_id}",
    response_model=PropertyResponse,
    summary="Update property",
    description="Owning agent only.",
    responses=get_lookup_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: UUID = Path(..., description="Property ID"),
    agent: User = Depends(require_agent),
    claim: IdentityClaim = Depends(get_current_claim),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_property(property_id, property_data, claim)
    return _to_response(property_obj)


@router.delete(
    "/properties/{property_id}",
    response_model=PropertyDeleteResponse,
    summary="Delete property",
    description="Owning agent only.",
    responses=get_lookup_error_responses()
)
async def delete_property(
    property_id: UUID = Path(..., description="Property ID"),
    agent: User = Depends(require_agent),
    claim: IdentityClaim = Depends(get_current_claim),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyDeleteResponse:
    deleted = await property_service.delete_property(property_id, claim)
    return PropertyDeleteResponse(deleted=deleted, id=str(property_id))
