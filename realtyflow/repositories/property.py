"""
Property repository for listing queries and verification state writes.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import asc, desc
from realtyflow.repositories.base import BaseRepository
from realtyflow.models.property import Property, VerificationStatus
from typing import Optional, List, Iterable, Dict
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    """
    
    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)
    
    async def find_verified(
        self,
        search: Optional[str] = None,
        sort_by_price: bool = False
    ) -> List[Property]:
        """
        Public listing query.
        
        Args:
            search: Case-insensitive substring matched against location
            sort_by_price: Order ascending by minimum price
            
        Returns:
            Verified properties only
        """
        try:
            query = self._select().where(Property.verification_status == VerificationStatus.VERIFIED)
            
            if search:
                query = query.where(Property.location.icontains(search, autoescape=True))
            
            if sort_by_price:
                query = query.order_by(asc(Property.price_min), asc(Property.created_at))
            else:
                query = query.order_by(desc(Property.created_at))
            
            result = await self.db.execute(query)
            properties = list(result.scalars().all())
            logger.debug(f"Verified listing query returned {len(properties)} properties (search={search!r}, sort={sort_by_price})")
            return properties
        except Exception as e:
            logger.error(f"Failed to query verified properties: {e}")
            raise
    
    async def find_by_agent(self, agent_email: str) -> List[Property]:
        return await self.get_multi(filters={"agent_email": agent_email})
    
    async def find_by_ids(self, ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, Property]:
        """Map of id to property for the ids that still exist."""
        ids = list(set(ids))
        if not ids:
            return {}
        properties = await self.get_multi(filters={"id": ids})
        return {prop.id: prop for prop in properties}
    
    async def update_verification_status(
        self,
        property_id: uuid.UUID,
        status: VerificationStatus,
        commit: bool = True
    ) -> Optional[Property]:
        updated = await self.update(property_id, {"verification_status": status}, commit=commit)
        if updated:
            logger.info(f"Property {property_id} verification status set to {status.value}")
        return updated
    
    async def delete_by_agent(self, agent_email: str, commit: bool = True) -> int:
        """Delete every listing owned by the agent. Returns the number removed."""
        deleted = await self.delete_where({"agent_email": agent_email}, commit=commit)
        logger.info(f"Deleted {deleted} properties listed by {agent_email}")
        return deleted
