"""
Review service. Reviews cannot be edited; the reviewer or an admin may delete one.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from realtyflow.repositories.review import ReviewRepository
from realtyflow.repositories.property import PropertyRepository
from realtyflow.models.review import Review
from realtyflow.models.user import User
from realtyflow.schemas.review import ReviewCreate
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.exceptions import NotFoundError, OwnershipError
import uuid
import logging

logger = logging.getLogger(__name__)


class ReviewService:
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.review_repo = ReviewRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
    
    async def create(self, review_data: ReviewCreate, claim: IdentityClaim, reviewer: Optional[User] = None) -> Review:
        property_obj = await self.property_repo.get_by_id(review_data.property_id)
        if not property_obj:
            raise NotFoundError("Property", str(review_data.property_id))
        
        review = await self.review_repo.create({
            "reviewer_email": claim.email,
            "reviewer_name": reviewer.name if reviewer else None,
            "reviewer_image": reviewer.image if reviewer else None,
            "property_id": property_obj.id,
            "property_title": property_obj.title,
            "agent_name": property_obj.agent_name,
            "rating": review_data.rating,
            "text": review_data.text,
        })
        logger.info(f"Review {review.id} posted by {claim.email} for property {property_obj.id}")
        return review
    
    async def list_by_reviewer(self, reviewer_email: str) -> List[Review]:
        return await self.review_repo.find_by_reviewer(reviewer_email)
    
    async def list_by_property(self, property_id: uuid.UUID) -> List[Review]:
        return await self.review_repo.find_by_property(property_id)
    
    async def list_latest(self, limit: int = 10) -> List[Review]:
        return await self.review_repo.find_latest(limit)
    
    async def delete(self, review_id: uuid.UUID, claim: IdentityClaim, viewer: Optional[User] = None) -> bool:
        review = await self.review_repo.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Review", str(review_id))
        if review.reviewer_email != claim.email and not (viewer and viewer.is_admin):
            raise OwnershipError("review")
        return await self.review_repo.delete(review.id)
