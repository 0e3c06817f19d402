"""
Offer repository: buyer/agent queries and status writes, including the bulk
status update used to reject competing offers on a property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update
from realtyflow.repositories.base import BaseRepository
from realtyflow.models.offer import Offer, OfferStatus
from typing import Optional, List
import uuid
import logging

logger = logging.getLogger(__name__)


class OfferRepository(BaseRepository[Offer]):
    
    def __init__(self, db: AsyncSession):
        super().__init__(Offer, db)
    
    async def find_by_buyer(self, buyer_email: str) -> List[Offer]:
        return await self.get_multi(filters={"buyer_email": buyer_email})
    
    async def find_by_agent(self, agent_email: str) -> List[Offer]:
        return await self.get_multi(filters={"agent_email": agent_email})
    
    async def find_sold_by_agent(self, agent_email: str) -> List[Offer]:
        return await self.get_multi(filters={"agent_email": agent_email, "status": OfferStatus.BOUGHT})
    
    async def update_status(self, offer_id: uuid.UUID, status: OfferStatus, commit: bool = True) -> Optional[Offer]:
        return await self.update(offer_id, {"status": status}, commit=commit)
    
    async def bulk_update_status(
        self,
        property_id: uuid.UUID,
        new_status: OfferStatus,
        excluded_status: OfferStatus,
        only_pending: bool = True,
        exclude_id: Optional[uuid.UUID] = None,
        agent_email: Optional[str] = None,
        commit: bool = True
    ) -> int:
        """
        Set ``new_status`` on every offer for the property whose status differs
        from ``excluded_status``.
        
        Args:
            property_id: Property whose offers are updated
            new_status: Status written to the matched offers
            excluded_status: Offers already in this status are left alone
            only_pending: Restrict the update to offers still Pending
            exclude_id: Offer id that is never touched
            agent_email: Restrict the update to offers made to this agent
            
        Returns:
            Number of offers updated
        """
        try:
            stmt = (
                update(Offer)
                .where(Offer.property_id == property_id)
                .where(Offer.status != excluded_status)
            )
            if only_pending:
                stmt = stmt.where(Offer.status == OfferStatus.PENDING)
            if exclude_id is not None:
                stmt = stmt.where(Offer.id != exclude_id)
            if agent_email is not None:
                stmt = stmt.where(Offer.agent_email == agent_email)
            
            stmt = stmt.values(status=new_status).execution_options(synchronize_session=False)
            result = await self.db.execute(stmt)
            await self._finish(commit)
            
            logger.info(
                f"Bulk set {result.rowcount} offers on property {property_id} to {new_status.value} "
                f"(excluding status {excluded_status.value})"
            )
            return result.rowcount
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to bulk update offers on property {property_id}: {e}")
            raise
    
    async def record_payment(self, offer_id: uuid.UUID, transaction_id: str, commit: bool = True) -> Optional[Offer]:
        return await self.update(
            offer_id,
            {"status": OfferStatus.BOUGHT, "transaction_id": transaction_id},
            commit=commit
        )
