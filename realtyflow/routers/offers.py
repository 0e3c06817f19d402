"""
Offer endpoints: buyer offers, agent decisions, bulk rejection and payment completion.
"""

from fastapi import APIRouter, Depends, Path, status
from typing import Optional, List
from uuid import UUID

from realtyflow.models.user import User
from realtyflow.schemas.offer import (
    OfferCreate,
    OfferStatusUpdate,
    BulkStatusUpdate,
    BulkStatusResponse,
    OfferDecision,
    OfferDecisionResponse,
    PaymentCompletion,
    OfferResponse,
)
from realtyflow.schemas.error import (
    get_common_error_responses,
    get_lookup_error_responses,
    get_transition_error_responses,
)
from realtyflow.services.offer import OfferService
from realtyflow.services.payment import PaymentService
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.dependencies import (
    get_current_claim,
    get_current_user,
    get_offer_service,
    get_payment_service,
    require_agent,
)


router = APIRouter(prefix="/makeOffer", tags=["Offers"])


def _to_response(offer) -> OfferResponse:
    return OfferResponse.model_validate(offer.to_dict())


@router.post(
    "",
    response_model=OfferResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Make offer",
    description="Offer on a verified property. The caller is the buyer.",
    responses=get_transition_error_responses()
)
async def make_offer(
    offer_data: OfferCreate,
    claim: IdentityClaim = Depends(get_current_claim),
    buyer: Optional[User] = Depends(get_current_user),
    offer_service: OfferService = Depends(get_offer_service)
) -> OfferResponse:
    offer = await offer_service.make_offer(offer_data, claim, buyer)
    return _to_response(offer)


@router.get(
    "/user/{email}",
    response_model=List[OfferResponse],
    summary="List own offers",
    responses=get_common_error_responses()
)
async def list_buyer_offers(
    email: str = Path(..., description="Buyer email; must be the caller's"),
    claim: IdentityClaim = Depends(get_current_claim),
    offer_service: OfferService = Depends(get_offer_service)
) -> List[OfferResponse]:
    return [_to_response(offer) for offer in await offer_service.list_by_buyer(email, claim)]


@router.get(
    "/agent/{email}",
    response_model=List[OfferResponse],
    summary="List offers received",
    description="Agent only.",
    responses=get_common_error_responses()
)
async def list_agent_offers(
    email: str = Path(..., description="Agent email; must be the caller's"),
    agent: User = Depends(require_agent),
    claim: IdentityClaim = Depends(get_current_claim),
    offer_service: OfferService = Depends(get_offer_service)
) -> List[OfferResponse]:
    return [_to_response(offer) for offer in await offer_service.list_by_agent(email, claim)]


@router.get(
    "/sold/{email}",
    response_model=List[OfferResponse],
    summary="List completed sales",
    description="Bought offers of the calling agent. Agent only.",
    responses=get_common_error_responses()
)
async def list_sold(
    email: str = Path(..., description="Agent email; must be the caller's"),
    agent: User = Depends(require_agent),
    claim: IdentityClaim = Depends(get_current_claim),
    offer_service: OfferService = Depends(get_offer_service)
) -> List[OfferResponse]:
    return [_to_response(offer) for offer in await offer_service.list_sold(email, claim)]


@router.patch(
    "/status/{offer_id}",
    response_model=OfferResponse,
    summary="Accept or reject offer",
    description="The offer's agent only. Pending offers move to Accepted or Rejected.",
    responses=get_transition_error_responses()
)
async def set_offer_status(
    status_data: OfferStatusUpdate,
    offer_id: UUID = Path(..., description="Offer ID"),
    agent: User = Depends(require_agent),
    claim: IdentityClaim = Depends(get_current_claim),
    offer_service: OfferService = Depends(get_offer_service)
) -> OfferResponse:
    offer = await offer_service.set_status(offer_id, status_data.status, claim)
    return _to_response(offer)


@router.patch(
    "/properties/{property_id}",
    response_model=BulkStatusResponse,
    summary="Reject competing offers",
    description=(
        "Agent only. Moves the caller's pending offers on the property to new_status, "
        "leaving offers whose status equals excluded_status untouched."
    ),
    responses=get_transition_error_responses()
)
async def bulk_update_offers(
    bulk_data: BulkStatusUpdate,
    property_id: UUID = Path(..., description="Property ID"),
    agent: User = Depends(require_agent),
    claim: IdentityClaim = Depends(get_current_claim),
    offer_service: OfferService = Depends(get_offer_service)
) -> BulkStatusResponse:
    updated = await offer_service.bulk_update_status(
        property_id, bulk_data.new_status, bulk_data.excluded_status, claim
    )
    return BulkStatusResponse(property_id=str(property_id), updated=updated)


@router.patch(
    "/decide/{offer_id}",
    response_model=OfferDecisionResponse,
    summary="Decide offer and reject the rest",
    description="Agent only. Accepting an offer rejects every other pending offer on the property in the same transaction.",
    responses=get_transition_error_responses()
)
async def decide_offer(
    decision: OfferDecision,
    offer_id: UUID = Path(..., description="Offer ID"),
    agent: User = Depends(require_agent),
    claim: IdentityClaim = Depends(get_current_claim),
    offer_service: OfferService = Depends(get_offer_service)
) -> OfferDecisionResponse:
    offer, others = await offer_service.decide_offer(offer_id, decision.status, claim, decision.others_status)
    return OfferDecisionResponse(offer=_to_response(offer), others_updated=others)


@router.patch(
    "/payment/{offer_id}",
    response_model=OfferResponse,
    summary="Complete payment",
    description="Buyer only. Records the gateway transaction id and marks the accepted offer as Bought.",
    responses=get_transition_error_responses()
)
async def complete_payment(
    payment_data: PaymentCompletion,
    offer_id: UUID = Path(..., description="Offer ID"),
    claim: IdentityClaim = Depends(get_current_claim),
    payment_service: PaymentService = Depends(get_payment_service)
) -> OfferResponse:
    offer = await payment_service.complete_payment(offer_id, payment_data.transaction_id, claim)
    return _to_response(offer)


@router.get(
    "/{offer_id}",
    response_model=OfferResponse,
    summary="Get offer",
    description="Visible to the buyer, the listing agent and admins.",
    responses=get_lookup_error_responses()
)
async def get_offer(
    offer_id: UUID = Path(..., description="Offer ID"),
    claim: IdentityClaim = Depends(get_current_claim),
    viewer: Optional[User] = Depends(get_current_user),
    offer_service: OfferService = Depends(get_offer_service)
) -> OfferResponse:
    offer = await offer_service.get_offer(offer_id, claim, viewer)
    return _to_response(offer)
