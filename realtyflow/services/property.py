"""
Property service: listing creation, visibility rules, the verification state
machine, and owner-only edits.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from realtyflow.repositories.property import PropertyRepository
from realtyflow.repositories.user import UserRepository
from realtyflow.models.property import Property, VerificationStatus
from realtyflow.models.user import User
from realtyflow.schemas.property import PropertyCreate, PropertyUpdate
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.exceptions import (
    NotFoundError,
    ForbiddenError,
    ValidationError,
    OwnershipError,
    InsufficientPermissionsError,
    InvalidTransitionError,
)
import uuid
import logging

logger = logging.getLogger(__name__)

# Verification is decided once; there is no way back to Pending.
VERIFICATION_TRANSITIONS = {
    VerificationStatus.PENDING: {VerificationStatus.VERIFIED, VerificationStatus.REJECTED},
    VerificationStatus.VERIFIED: set(),
    VerificationStatus.REJECTED: set(),
}


class PropertyService:
    """
    Property listing business rules.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def create_property(self, property_data: PropertyCreate, claim: IdentityClaim) -> Property:
        """
        Create a listing for the calling agent. The agent profile is copied
        from the account and verification starts at Pending.
        The agent row is locked for the duration, serializing with
        ``UserService.set_status``.

        Raises:
            InsufficientPermissionsError: If the caller is not an agent
            ForbiddenError: If the agent is marked as fraud
        """
        agent = await self.user_repo.get_by_email(claim.email, for_update=True)
        if not agent or not agent.is_agent:
            raise InsufficientPermissionsError("create properties")
        if agent.is_fraud:
            raise ForbiddenError("Fraud agents cannot list properties")

        create_data = property_data.model_dump(exclude={"price_range"})
        create_data.update({
            "price_min": property_data.price_range.min,
            "price_max": property_data.price_range.max,
            "agent_email": agent.email,
            "agent_name": agent.name,
            "agent_image": agent.image,
            "verification_status": VerificationStatus.PENDING,
        })

        created = await self.property_repo.create(create_data)
        logger.info(f"Property created by {agent.email}: {created.title} (ID: {created.id})")
        return created

    async def list_all(self) -> List[Property]:
        return await self.property_repo.get_multi()

    async def list_verified(self, search: Optional[str] = None, sort_by_price: bool = False) -> List[Property]:
        return await self.property_repo.find_verified(search=search, sort_by_price=sort_by_price)

    async def list_by_agent(self, agent_email: str, claim: IdentityClaim) -> List[Property]:
        if agent_email.lower() != claim.email.lower():
            raise OwnershipError("listing")
        return await self.property_repo.find_by_agent(agent_email)

    async def get_property(self, property_id: uuid.UUID, viewer: Optional[User], claim: IdentityClaim) -> Property:
        """
        Get a listing. Pending and Rejected listings are only visible to the
        owning agent and to admins; for anyone else they do not exist.
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise NotFoundError("Property", str(property_id))

        if not property_obj.is_verified and not self._can_see_unverified(property_obj, viewer, claim):
            raise NotFoundError("Property", str(property_id))

        return property_obj

    async def set_verification_status(self, property_id: uuid.UUID, status: VerificationStatus) -> Property:
        """
        Admin verification decision.

        Raises:
            NotFoundError: If the property does not exist
            InvalidTransitionError: If the listing was already decided
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise NotFoundError("Property", str(property_id))

        current = property_obj.verification_status
        if status not in VERIFICATION_TRANSITIONS[current]:
            raise InvalidTransitionError("Property", current.value, status.value)

        return await self.property_repo.update_verification_status(property_id, status)

    async def update_property(self, property_id: uuid.UUID, property_data: PropertyUpdate, claim: IdentityClaim) -> Property:
        property_obj = await self._get_owned(property_id, claim)

        update_data = property_data.model_dump(exclude={"price_range"}, exclude_none=True)
        if property_data.price_range is not None:
            update_data["price_min"] = property_data.price_range.min
            update_data["price_max"] = property_data.price_range.max

        if not update_data:
            raise ValidationError("No valid fields provided for update")

        updated = await self.property_repo.update(property_obj.id, update_data)
        logger.info(f"Property {property_id} updated by {claim.email}")
        return updated

    async def delete_property(self, property_id: uuid.UUID, claim: IdentityClaim) -> bool:
        property_obj = await self._get_owned(property_id, claim)
        deleted = await self.property_repo.delete(property_obj.id)
        logger.info(f"Property {property_id} deleted by {claim.email}")
        return deleted

    async def _get_owned(self, property_id: uuid.UUID, claim: IdentityClaim) -> Property:
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise NotFoundError("Property", str(property_id))
        if not property_obj.is_owned_by(claim.email):
            logger.warning(f"{claim.email} attempted to modify property {property_id}")
            raise OwnershipError("property")
        return property_obj

    @staticmethod
    def _can_see_unverified(property_obj: Property, viewer: Optional[User], claim: IdentityClaim) -> bool:
        if viewer is not None and viewer.is_admin:
            return True
        return property_obj.is_owned_by(claim.email)
