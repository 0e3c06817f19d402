"""
FastAPI dependency injection utilities: the authorization gate and service wiring.

Guards run in order and stop at the first failure:
    get_current_claim  -> 401 when the bearer credential is missing or invalid
    require_role(...)  -> 403 when the subject's current role does not match
Roles are read from the user store on every call and never cached.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from realtyflow.database import get_db
from realtyflow.models.user import User, UserRole
from realtyflow.repositories.user import UserRepository
from realtyflow.services.auth import AuthService
from realtyflow.services.user import UserService
from realtyflow.services.property import PropertyService
from realtyflow.services.offer import OfferService
from realtyflow.services.payment import PaymentService
from realtyflow.services.wishlist import WishlistService
from realtyflow.services.review import ReviewService
from realtyflow.services.identity import IdentityProviderClient, identity_provider
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.exceptions import UnauthorizedError, InsufficientPermissionsError
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_auth_service() -> AuthService:
    return AuthService()


def get_identity_provider() -> IdentityProviderClient:
    return identity_provider


async def get_user_service(
    db: AsyncSession = Depends(get_db),
    provider: IdentityProviderClient = Depends(get_identity_provider)
) -> UserService:
    return UserService(db, provider)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    return PropertyService(db)


async def get_offer_service(db: AsyncSession = Depends(get_db)) -> OfferService:
    return OfferService(db)


async def get_payment_service(db: AsyncSession = Depends(get_db)) -> PaymentService:
    return PaymentService(db)


async def get_wishlist_service(db: AsyncSession = Depends(get_db)) -> WishlistService:
    return WishlistService(db)


async def get_review_service(db: AsyncSession = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


async def get_current_claim(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> IdentityClaim:
    """
    Verify the bearer credential and attach the decoded claim to the request.

    Raises:
        UnauthorizedError: If no credential was sent or it fails verification
    """
    if not credentials or not credentials.credentials:
        raise UnauthorizedError()

    claim = auth_service.decode_claim(credentials.credentials)
    request.state.claim = claim
    return claim


async def get_current_user(
    claim: IdentityClaim = Depends(get_current_claim),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """
    Fresh account lookup for the authenticated subject.
    None when the subject has a valid credential but never registered.
    """
    return await UserRepository(db).get_by_email(claim.email)


def require_role(*roles: UserRole):
    """
    Create a dependency that admits only subjects whose current role is one of ``roles``.

    Returns:
        Dependency function yielding the subject's User record
    """
    allowed = set(roles)
    action = " or ".join(role.value for role in roles)

    async def role_dependency(
        claim: IdentityClaim = Depends(get_current_claim),
        current_user: Optional[User] = Depends(get_current_user)
    ) -> User:
        if current_user is None or current_user.role not in allowed:
            logger.warning(f"{claim.email} denied: requires {action}")
            raise InsufficientPermissionsError(f"access {action} resources")
        return current_user

    return role_dependency


require_agent = require_role(UserRole.AGENT)
require_admin = require_role(UserRole.ADMIN)
