"""
Payment bridge.

Requests a client-usable authorization handle (PaymentIntent client secret)
from the gateway, and later records a completed transaction onto an offer.
"""

from typing import Optional
from decimal import Decimal, ROUND_DOWN
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from realtyflow.config import settings
from realtyflow.repositories.offer import OfferRepository
from realtyflow.models.offer import Offer, OfferStatus
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.exceptions import (
    NotFoundError,
    ForbiddenError,
    BadRequestError,
    InvalidTransitionError,
    UpstreamServiceError,
)
import stripe
import uuid
import logging

logger = logging.getLogger(__name__)


def to_minor_units(price: Decimal) -> int:
    """Integer cents; fractions of a cent are truncated."""
    return int((Decimal(price) * 100).to_integral_value(rounding=ROUND_DOWN))


class PaymentService:
    """
    Gateway pass-through plus transaction correlation. Holds no local payment state.
    """
    
    def __init__(
        self,
        db_session: Optional[AsyncSession] = None,
        api_key: Optional[str] = None,
        currency: Optional[str] = None
    ):
        self.db = db_session
        self.offer_repo = OfferRepository(db_session) if db_session is not None else None
        self.api_key = api_key if api_key is not None else settings.stripe_secret_key
        self.currency = currency or settings.payment_currency
    
    async def create_payment_intent(self, price: Decimal) -> str:
        """
        Ask the gateway for an authorization handle for ``price``.
        
        Returns:
            The PaymentIntent client secret
        
        Raises:
            BadRequestError: If the amount rounds down to zero cents
            UpstreamServiceError: If the gateway call fails
        """
        amount = to_minor_units(price)
        if amount < 1:
            raise BadRequestError("Payment amount must be at least one cent")
        
        if not self.api_key:
            raise UpstreamServiceError("Payment gateway", "secret key is not configured")
        
        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                amount=amount,
                currency=self.currency,
                payment_method_types=["card"],
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.error(f"Payment gateway rejected intent for {amount} {self.currency}: {e}")
            raise UpstreamServiceError("Payment gateway", getattr(e, "user_message", None) or str(e))
        
        logger.info(f"Created payment intent {intent.id} for {amount} {self.currency}")
        return intent.client_secret
    
    async def complete_payment(self, offer_id: uuid.UUID, transaction_id: str, claim: IdentityClaim) -> Offer:
        """
        Record a successful charge: store the transaction id and move the offer
        from Accepted to Bought. Repeating the call with the same transaction id
        returns the offer unchanged.
        
        Raises:
            NotFoundError: If the offer does not exist
            ForbiddenError: If the caller is not the buyer
            InvalidTransitionError: If the offer is not Accepted
        """
        offer = await self.offer_repo.get_by_id(offer_id, for_update=True)
        if not offer:
            raise NotFoundError("Offer", str(offer_id))
        
        if offer.buyer_email != claim.email:
            logger.warning(f"{claim.email} attempted to pay for offer {offer_id} of {offer.buyer_email}")
            raise ForbiddenError()
        
        if offer.status == OfferStatus.BOUGHT and offer.transaction_id == transaction_id:
            return offer
        
        if offer.status != OfferStatus.ACCEPTED:
            raise InvalidTransitionError("Offer", offer.status.value, OfferStatus.BOUGHT.value)
        
        updated = await self.offer_repo.record_payment(offer.id, transaction_id)
        logger.info(f"Offer {offer_id} bought with transaction {transaction_id}")
        return updated
