"""
User service: registration, self lookup and admin account management,
including the fraud cascade and external identity revocation.
"""

from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from realtyflow.repositories.user import UserRepository
from realtyflow.repositories.property import PropertyRepository
from realtyflow.models.user import User, UserRole, UserStatus
from realtyflow.schemas.user import UserCreate
from realtyflow.services.identity import IdentityProviderClient
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.exceptions import (
    NotFoundError,
    ForbiddenError,
    ValidationError,
    UpstreamServiceError,
)
import uuid
import logging

logger = logging.getLogger(__name__)


class UserService:
    """
    Account lifecycle. Role and status are only ever changed here, and only
    on behalf of an admin (the routes guard that).
    """

    def __init__(self, db_session: AsyncSession, identity_provider: IdentityProviderClient = None):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.identity_provider = identity_provider

    async def register(self, user_data: UserCreate) -> Tuple[User, bool]:
        """
        Idempotent self-registration.

        Returns:
            Tuple of (user, created). A second registration with the same
            email returns the existing record and created=False.
        """
        existing = await self.user_repo.get_by_email(user_data.email)
        if existing:
            logger.debug(f"Registration for existing user {user_data.email}")
            return existing, False

        try:
            user = await self.user_repo.create_user(user_data.model_dump())
        except ValueError as e:
            raise ValidationError(str(e))
        return user, True

    async def get_self(self, email: str, claim: IdentityClaim) -> User:
        """Callable only by the subject itself."""
        if email.lower() != claim.email.lower():
            logger.warning(f"{claim.email} attempted to read account {email}")
            raise ForbiddenError()

        user = await self.user_repo.get_by_email(email)
        if not user:
            raise NotFoundError("User", email)
        return user

    async def list_users(self) -> List[User]:
        return await self.user_repo.get_all()

    async def set_role(self, user_id: uuid.UUID, role: UserRole) -> User:
        user = await self.user_repo.set_role(user_id, role)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user

    async def set_status(self, email: str, status: UserStatus) -> Tuple[User, int]:
        """
        Change account standing. Marking a user as Fraud also deletes every
        property listed under their email; both writes share one transaction.

        Returns:
            Tuple of (updated user, number of deleted properties)
        """
        try:
            user = await self.user_repo.set_status(email, status, commit=False)
            if not user:
                raise NotFoundError("User", email)

            deleted = 0
            if status == UserStatus.FRAUD:
                deleted = await self.property_repo.delete_by_agent(user.email, commit=False)

            await self.user_repo.commit()
        except Exception:
            await self.user_repo.rollback()
            raise

        if status == UserStatus.FRAUD:
            logger.warning(f"User {user.email} marked as fraud; {deleted} listings removed")
        else:
            logger.info(f"User {user.email} status set to {status.value}")
        return user, deleted

    async def delete_user(self, user_id: uuid.UUID, uid: str) -> bool:
        """
        Delete the local account, then revoke its external identity.

        The local deletion is committed before the provider is called and is not
        rolled back if revocation fails; that failure is raised to the caller.

        Returns:
            True when both the record and the external identity were removed

        Raises:
            NotFoundError: If no user has this id
            UpstreamServiceError: If the identity provider call failed
        """
        deleted = await self.user_repo.delete_user(user_id)
        if not deleted:
            raise NotFoundError("User", str(user_id))

        if self.identity_provider is None:
            raise UpstreamServiceError("Identity provider", "no client configured")

        try:
            await self.identity_provider.delete_identity(uid)
        except UpstreamServiceError:
            logger.error(
                f"User {user_id} deleted locally but external identity {uid} was not revoked; "
                f"manual cleanup required"
            )
            raise
        return True
