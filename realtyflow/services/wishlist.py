"""
Wishlist service: owner-scoped bookmarks joined with current property data.
"""

from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from realtyflow.repositories.wishlist import WishlistRepository
from realtyflow.repositories.property import PropertyRepository
from realtyflow.models.wishlist import WishlistEntry
from realtyflow.models.property import Property
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.exceptions import NotFoundError, ForbiddenError, OwnershipError
import uuid
import logging

logger = logging.getLogger(__name__)

WishlistItem = Tuple[WishlistEntry, Optional[Property]]


class WishlistService:
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.wishlist_repo = WishlistRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
    
    async def add(self, property_id: uuid.UUID, claim: IdentityClaim) -> WishlistEntry:
        """Bookmark a property for the caller. Adding the same property twice is a no-op."""
        if not await self.property_repo.get_by_id(property_id):
            raise NotFoundError("Property", str(property_id))
        
        existing = await self.wishlist_repo.find_entry(claim.email, property_id)
        if existing:
            return existing
        
        entry = await self.wishlist_repo.create({"user_email": claim.email, "property_id": property_id})
        logger.info(f"{claim.email} wishlisted property {property_id}")
        return entry
    
    async def list_for_user(self, user_email: str, claim: IdentityClaim) -> List[WishlistItem]:
        if user_email.lower() != claim.email.lower():
            raise ForbiddenError()
        return await self.wishlist_repo.find_by_user_with_property(user_email)
    
    async def get_item(self, entry_id: uuid.UUID, claim: IdentityClaim) -> WishlistItem:
        item = await self.wishlist_repo.get_with_property(entry_id)
        if item is None:
            raise NotFoundError("Wishlist entry", str(entry_id))
        if item[0].user_email != claim.email:
            raise OwnershipError("wishlist entry")
        return item
    
    async def remove(self, entry_id: uuid.UUID, claim: IdentityClaim) -> bool:
        entry = await self.wishlist_repo.get_by_id(entry_id)
        if entry is None:
            raise NotFoundError("Wishlist entry", str(entry_id))
        if entry.user_email != claim.email:
            raise OwnershipError("wishlist entry")
        return await self.wishlist_repo.delete(entry.id)
