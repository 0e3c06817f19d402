"""
Offer service: the offer negotiation state machine.

    Pending --agent--> Accepted --payment--> Bought
    Pending --agent--> Rejected

Accepting an offer is expected to reject the competing pending offers on the
same property; ``decide_offer`` does both in one transaction, while
``bulk_update_status`` exposes the competing-offer step on its own.
"""

from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from realtyflow.repositories.offer import OfferRepository
from realtyflow.repositories.property import PropertyRepository
from realtyflow.models.offer import Offer, OfferStatus
from realtyflow.models.user import User
from realtyflow.schemas.offer import OfferCreate
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.exceptions import (
    NotFoundError,
    ForbiddenError,
    OwnershipError,
    InvalidTransitionError,
    BusinessRuleViolationError,
)
import uuid
import logging

logger = logging.getLogger(__name__)

# Transitions the listing agent may perform. Bought is reached only via payment.
AGENT_TRANSITIONS = {
    OfferStatus.PENDING: {OfferStatus.ACCEPTED, OfferStatus.REJECTED},
    OfferStatus.ACCEPTED: set(),
    OfferStatus.REJECTED: set(),
    OfferStatus.BOUGHT: set(),
}

# Statuses that claim the property for one buyer.
CLAIMING_STATUSES = [OfferStatus.ACCEPTED, OfferStatus.BOUGHT]


class OfferService:
    """
    Offer lifecycle rules and the agent-side decisions.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.offer_repo = OfferRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def make_offer(self, offer_data: OfferCreate, claim: IdentityClaim, buyer: Optional[User] = None) -> Offer:
        """
        Create a Pending offer against a verified listing.

        Raises:
            NotFoundError: If the property does not exist
            BusinessRuleViolationError: If the listing is not verified or the buyer is its agent
        """
        property_obj = await self.property_repo.get_by_id(offer_data.property_id)
        if not property_obj:
            raise NotFoundError("Property", str(offer_data.property_id))

        if not property_obj.is_verified:
            raise BusinessRuleViolationError("verified_property", "offers can only be made on verified properties")

        if property_obj.is_owned_by(claim.email):
            raise BusinessRuleViolationError("self_offer", "agents cannot make offers on their own listings")

        buyer_name = offer_data.buyer_name or (buyer.name if buyer else None)
        offer = await self.offer_repo.create({
            "property_id": property_obj.id,
            "property_title": property_obj.title,
            "property_location": property_obj.location,
            "property_image": property_obj.image,
            "buyer_email": claim.email,
            "buyer_name": buyer_name,
            "agent_email": property_obj.agent_email,
            "agent_name": property_obj.agent_name,
            "offered_price": offer_data.offered_price,
            "status": OfferStatus.PENDING,
        })
        logger.info(f"Offer {offer.id} made by {claim.email} on property {property_obj.id}")
        return offer

    async def get_offer(self, offer_id: uuid.UUID, claim: IdentityClaim, viewer: Optional[User] = None) -> Offer:
        """Visible to the buyer, the listing agent and admins."""
        offer = await self.offer_repo.get_by_id(offer_id)
        if not offer:
            raise NotFoundError("Offer", str(offer_id))

        if claim.email not in (offer.buyer_email, offer.agent_email) and not (viewer and viewer.is_admin):
            raise ForbiddenError()
        return offer

    async def list_by_buyer(self, buyer_email: str, claim: IdentityClaim) -> List[Offer]:
        self._require_self(buyer_email, claim)
        return await self.offer_repo.find_by_buyer(buyer_email)

    async def list_by_agent(self, agent_email: str, claim: IdentityClaim) -> List[Offer]:
        self._require_self(agent_email, claim)
        return await self.offer_repo.find_by_agent(agent_email)

    async def list_sold(self, agent_email: str, claim: IdentityClaim) -> List[Offer]:
        """Completed sales of the calling agent."""
        self._require_self(agent_email, claim)
        return await self.offer_repo.find_sold_by_agent(agent_email)

    async def set_status(self, offer_id: uuid.UUID, status: OfferStatus, claim: IdentityClaim, commit: bool = True) -> Offer:
        """
        Agent decision on a single offer.

        The property row is locked before the offer is re-read, so concurrent
        decisions on the same property run one after another and the holder
        check below sees any acceptance committed ahead of it.

        Raises:
            OwnershipError: If the caller is not the offer's agent
            InvalidTransitionError: If the offer is not Pending or the target is not a decision
            BusinessRuleViolationError: If another offer already holds the property
        """
        offer = await self._get_for_agent(offer_id, claim)
        await self.property_repo.get_by_id(offer.property_id, for_update=True)
        offer = await self.offer_repo.get_by_id(offer_id, for_update=True)
        if not offer:
            raise NotFoundError("Offer", str(offer_id))

        if status not in AGENT_TRANSITIONS[offer.status]:
            raise InvalidTransitionError("Offer", offer.status.value, status.value)

        if status == OfferStatus.ACCEPTED:
            holders = await self.offer_repo.get_multi(
                filters={"property_id": offer.property_id, "status": CLAIMING_STATUSES},
                limit=1
            )
            if holders:
                raise BusinessRuleViolationError(
                    "single_accepted_offer",
                    f"offer {holders[0].id} is already {holders[0].status.value}"
                )

        updated = await self.offer_repo.update_status(offer.id, status, commit=commit)
        logger.info(f"Offer {offer_id} set to {status.value} by {claim.email}")
        return updated

    async def bulk_update_status(
        self,
        property_id: uuid.UUID,
        new_status: OfferStatus,
        excluded_status: OfferStatus,
        claim: IdentityClaim
    ) -> int:
        """
        Move the calling agent's pending offers on a property to ``new_status``,
        skipping any offer whose status equals ``excluded_status``.

        Only Pending offers are touched, so an offer that was already decided
        keeps its status whatever exclusion value the caller passes.
        """
        if new_status != OfferStatus.REJECTED:
            raise InvalidTransitionError("Offer", OfferStatus.PENDING.value, new_status.value)

        await self.property_repo.get_by_id(property_id, for_update=True)
        return await self.offer_repo.bulk_update_status(
            property_id,
            new_status=new_status,
            excluded_status=excluded_status,
            only_pending=True,
            agent_email=claim.email
        )

    async def decide_offer(
        self,
        offer_id: uuid.UUID,
        status: OfferStatus,
        claim: IdentityClaim,
        others_status: OfferStatus = OfferStatus.REJECTED
    ) -> Tuple[Offer, int]:
        """
        Decide one offer and, when it is accepted, move every other pending
        offer on the same property to ``others_status``. Both writes are
        committed together or not at all.

        Returns:
            Tuple of (decided offer, number of competing offers updated)
        """
        if status == OfferStatus.ACCEPTED and others_status != OfferStatus.REJECTED:
            raise BusinessRuleViolationError("single_accepted_offer", "competing offers must be rejected")

        try:
            offer = await self.set_status(offer_id, status, claim, commit=False)

            others = 0
            if status == OfferStatus.ACCEPTED:
                others = await self.offer_repo.bulk_update_status(
                    offer.property_id,
                    new_status=others_status,
                    excluded_status=status,
                    only_pending=True,
                    exclude_id=offer.id,
                    commit=False
                )

            await self.offer_repo.commit()
        except Exception:
            await self.offer_repo.rollback()
            raise

        offer = await self.offer_repo.get_by_id(offer_id)
        logger.info(f"Offer {offer_id} decided as {status.value}; {others} competing offers set to {others_status.value}")
        return offer, others

    async def _get_for_agent(self, offer_id: uuid.UUID, claim: IdentityClaim) -> Offer:
        offer = await self.offer_repo.get_by_id(offer_id)
        if not offer:
            raise NotFoundError("Offer", str(offer_id))
        if offer.agent_email != claim.email:
            logger.warning(f"{claim.email} attempted to decide offer {offer_id} of {offer.agent_email}")
            raise OwnershipError("offer")
        return offer

    @staticmethod
    def _require_self(email: str, claim: IdentityClaim) -> None:
        if email.lower() != claim.email.lower():
            raise ForbiddenError()
