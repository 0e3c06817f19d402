"""
Test configuration and fixtures for the Realty Flow API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-realty-flow-suite-0123456789"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_realtyflow"

import pytest
import uuid
from datetime import timedelta
from decimal import Decimal
from typing import AsyncGenerator, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from realtyflow.main import app
from realtyflow.database import Base, get_db
from realtyflow.models.user import User, UserRole, UserStatus
from realtyflow.models.property import Property, VerificationStatus
from realtyflow.models.offer import Offer, OfferStatus
from realtyflow.repositories.user import UserRepository
from realtyflow.repositories.property import PropertyRepository
from realtyflow.repositories.offer import OfferRepository
from realtyflow.repositories.wishlist import WishlistRepository
from realtyflow.repositories.review import ReviewRepository
from realtyflow.services.user import UserService
from realtyflow.services.property import PropertyService
from realtyflow.services.offer import OfferService
from realtyflow.services.payment import PaymentService
from realtyflow.services.wishlist import WishlistService
from realtyflow.services.review import ReviewService
from realtyflow.utils.auth import IdentityClaim, create_access_token, verify_token
from realtyflow.utils.dependencies import get_identity_provider
from realtyflow.utils.exceptions import UpstreamServiceError


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


class FakeIdentityProvider:
    """Records revoked uids instead of calling the real provider."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.deleted: List[str] = []

    async def delete_identity(self, uid: str) -> None:
        if self.fail:
            raise UpstreamServiceError("Identity provider", "provider unavailable")
        self.deleted.append(uid)


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
async def async_client(db_session: AsyncSession, identity_provider: FakeIdentityProvider) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session and identity provider overrides."""
    def override_get_db():
        return db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def offer_repository(db_session: AsyncSession) -> OfferRepository:
    return OfferRepository(db_session)


@pytest.fixture
def wishlist_repository(db_session: AsyncSession) -> WishlistRepository:
    return WishlistRepository(db_session)


@pytest.fixture
def review_repository(db_session: AsyncSession) -> ReviewRepository:
    return ReviewRepository(db_session)


# Service fixtures
@pytest.fixture
def user_service(db_session: AsyncSession, identity_provider: FakeIdentityProvider) -> UserService:
    return UserService(db_session, identity_provider)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


@pytest.fixture
def offer_service(db_session: AsyncSession) -> OfferService:
    return OfferService(db_session)


@pytest.fixture
def payment_service(db_session: AsyncSession) -> PaymentService:
    return PaymentService(db_session, api_key="sk_test_realtyflow", currency="usd")


@pytest.fixture
def wishlist_service(db_session: AsyncSession) -> WishlistService:
    return WishlistService(db_session)


@pytest.fixture
def review_service(db_session: AsyncSession) -> ReviewService:
    return ReviewService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: str = None,
        name: str = "Test User",
        role: UserRole = UserRole.USER,
        status: UserStatus = UserStatus.ACTIVE,
        image: Optional[str] = None
    ) -> User:
        return await user_repo.create_user({
            "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
            "name": name,
            "image": image,
            "role": role,
            "status": status,
        })


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        agent: User,
        title: str = "Test Property",
        location: str = "Test City",
        price_min: Decimal = Decimal("100000.00"),
        price_max: Decimal = Decimal("150000.00"),
        verification_status: VerificationStatus = VerificationStatus.VERIFIED
    ) -> Property:
        return await property_repo.create({
            "title": title,
            "location": location,
            "description": "A test listing",
            "image": "https://img.example.com/house.jpg",
            "price_min": price_min,
            "price_max": price_max,
            "agent_email": agent.email,
            "agent_name": agent.name,
            "agent_image": agent.image,
            "verification_status": verification_status,
        })


class OfferFactory:
    """Factory for creating test offers."""

    @staticmethod
    async def create_offer(
        offer_repo: OfferRepository,
        property_obj: Property,
        buyer_email: str = None,
        offered_price: Decimal = Decimal("120000.00"),
        status: OfferStatus = OfferStatus.PENDING
    ) -> Offer:
        return await offer_repo.create({
            "property_id": property_obj.id,
            "property_title": property_obj.title,
            "property_location": property_obj.location,
            "property_image": property_obj.image,
            "buyer_email": buyer_email or f"buyer{uuid.uuid4().hex[:8]}@example.com",
            "buyer_name": "Test Buyer",
            "agent_email": property_obj.agent_email,
            "agent_name": property_obj.agent_name,
            "offered_price": offered_price,
            "status": status,
        })


# Credential helpers
def make_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    return create_access_token({"email": email}, expires_delta=expires_delta)


def auth_headers(email: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(email)}"}


def claim_for(email: str) -> IdentityClaim:
    return verify_token(make_token(email))


# Common test fixtures
@pytest.fixture
async def test_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="buyer@example.com", name="Test Buyer")


@pytest.fixture
async def test_agent(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="agent@example.com",
        name="Test Agent",
        role=UserRole.AGENT,
        image="https://img.example.com/agent.jpg"
    )


@pytest.fixture
async def other_agent(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="other.agent@example.com",
        name="Other Agent",
        role=UserRole.AGENT
    )


@pytest.fixture
async def test_admin(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="admin@example.com",
        name="Test Admin",
        role=UserRole.ADMIN
    )


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_agent: User) -> Property:
    """Verified listing owned by test_agent."""
    return await PropertyFactory.create_property(
        property_repository,
        test_agent,
        title="Lakeside Cottage",
        location="Lake Tahoe, CA",
        price_min=Decimal("250000.00"),
        price_max=Decimal("300000.00")
    )


@pytest.fixture
async def test_pending_property(property_repository: PropertyRepository, test_agent: User) -> Property:
    return await PropertyFactory.create_property(
        property_repository,
        test_agent,
        title="Pending Loft",
        location="Downtown",
        verification_status=VerificationStatus.PENDING
    )


@pytest.fixture
async def test_offer(offer_repository: OfferRepository, test_property: Property, test_user: User) -> Offer:
    return await OfferFactory.create_offer(offer_repository, test_property, buyer_email=test_user.email)
