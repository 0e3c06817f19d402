"""
Payment gateway bridge endpoint.
"""

from fastapi import APIRouter, Depends

from realtyflow.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from realtyflow.schemas.error import get_upstream_error_responses
from realtyflow.services.payment import PaymentService
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.dependencies import get_current_claim, get_payment_service


router = APIRouter(tags=["Payments"])


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    summary="Create payment intent",
    description="Request a client secret from the payment gateway for the given price in major currency units.",
    responses=get_upstream_error_responses()
)
async def create_payment_intent(
    payment_data: PaymentIntentRequest,
    claim: IdentityClaim = Depends(get_current_claim),
    payment_service: PaymentService = Depends(get_payment_service)
) -> PaymentIntentResponse:
    client_secret = await payment_service.create_payment_intent(payment_data.price)
    return PaymentIntentResponse(client_secret=client_secret)
