"""
Review repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from realtyflow.repositories.base import BaseRepository
from realtyflow.models.review import Review
from typing import List
import uuid


class ReviewRepository(BaseRepository[Review]):
    
    def __init__(self, db: AsyncSession):
        super().__init__(Review, db)
    
    async def find_by_reviewer(self, reviewer_email: str) -> List[Review]:
        return await self.get_multi(filters={"reviewer_email": reviewer_email})
    
    async def find_by_property(self, property_id: uuid.UUID) -> List[Review]:
        return await self.get_multi(filters={"property_id": property_id})
    
    async def find_latest(self, limit: int = 10) -> List[Review]:
        return await self.get_multi(limit=limit)
