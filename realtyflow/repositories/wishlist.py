"""
Wishlist repository with the property join used by the wishlist views.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from realtyflow.repositories.base import BaseRepository
from realtyflow.repositories.property import PropertyRepository
from realtyflow.models.wishlist import WishlistEntry
from realtyflow.models.property import Property
from typing import Optional, List, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


class WishlistRepository(BaseRepository[WishlistEntry]):
    
    def __init__(self, db: AsyncSession):
        super().__init__(WishlistEntry, db)
        self.property_repo = PropertyRepository(db)
    
    async def find_entry(self, user_email: str, property_id: uuid.UUID) -> Optional[WishlistEntry]:
        entries = await self.get_multi(filters={"user_email": user_email, "property_id": property_id}, limit=1)
        return entries[0] if entries else None
    
    async def find_by_user_with_property(self, user_email: str) -> List[Tuple[WishlistEntry, Optional[Property]]]:
        """
        Wishlist entries for a user, each paired with the referenced property.
        The property is None when the listing no longer exists.
        """
        entries = await self.get_multi(filters={"user_email": user_email})
        properties = await self.property_repo.find_by_ids(entry.property_id for entry in entries)
        return [(entry, properties.get(entry.property_id)) for entry in entries]
    
    async def get_with_property(self, entry_id: uuid.UUID) -> Optional[Tuple[WishlistEntry, Optional[Property]]]:
        entry = await self.get_by_id(entry_id)
        if entry is None:
            return None
        return entry, await self.property_repo.get_by_id(entry.property_id)
