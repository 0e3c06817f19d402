"""
Tests for repository classes.
Covers CRUD helpers, the listing queries and the bulk offer update.
"""

import pytest
import uuid
from decimal import Decimal
from sqlalchemy.dialects import postgresql

from realtyflow.models.user import User, UserRole, UserStatus
from realtyflow.models.property import Property, VerificationStatus
from realtyflow.models.offer import OfferStatus
from realtyflow.repositories.user import UserRepository
from realtyflow.repositories.property import PropertyRepository
from realtyflow.repositories.offer import OfferRepository
from realtyflow.repositories.wishlist import WishlistRepository
from realtyflow.repositories.review import ReviewRepository
from tests.conftest import UserFactory, PropertyFactory, OfferFactory


class TestBaseRepository:
    """Generic repository behaviour, exercised through UserRepository."""

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, user_repository: UserRepository):
        assert await user_repository.get_by_id(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_update_skips_none_values(self, user_repository: UserRepository, test_user: User):
        updated = await user_repository.update(test_user.id, {"name": "Renamed", "image": None})

        assert updated.name == "Renamed"
        assert updated.email == test_user.email

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, user_repository: UserRepository):
        assert await user_repository.update(uuid.uuid4(), {"name": "X"}) is None

    @pytest.mark.asyncio
    async def test_delete(self, user_repository: UserRepository, test_user: User):
        assert await user_repository.delete(test_user.id) is True
        assert await user_repository.get_by_id(test_user.id) is None
        assert await user_repository.delete(test_user.id) is False

    @pytest.mark.asyncio
    async def test_count_and_list_filters(self, user_repository: UserRepository, test_user: User, test_agent: User, test_admin: User):
        assert await user_repository.count() == 3
        assert await user_repository.count({"role": UserRole.AGENT}) == 1

        staff = await user_repository.get_multi(filters={"role": [UserRole.AGENT, UserRole.ADMIN]})
        assert {user.email for user in staff} == {test_agent.email, test_admin.email}

    @pytest.mark.asyncio
    async def test_unknown_filter_field(self, user_repository: UserRepository):
        with pytest.raises(ValueError):
            await user_repository.get_multi(filters={"nonexistent": 1})

    @pytest.mark.asyncio
    async def test_delete_where_requires_filters(self, user_repository: UserRepository):
        with pytest.raises(ValueError):
            await user_repository.delete_where({})

    def test_locking_select_renders_for_update(self, user_repository: UserRepository):
        dialect = postgresql.dialect()

        locked = str(user_repository._select(for_update=True).compile(dialect=dialect))
        plain = str(user_repository._select().compile(dialect=dialect))

        assert "FOR UPDATE" in locked
        assert "FOR UPDATE" not in plain


class TestUserRepository:

    @pytest.mark.asyncio
    async def test_create_user_defaults(self, user_repository: UserRepository):
        user = await user_repository.create_user({"email": "New.Person@Example.com", "name": "New"})

        assert user.email == "new.person@example.com"
        assert user.role == UserRole.USER
        assert user.status == UserStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_create_user_invalid_email(self, user_repository: UserRepository):
        with pytest.raises(ValueError):
            await user_repository.create_user({"email": "not-an-email"})

    @pytest.mark.asyncio
    async def test_get_by_email_is_case_insensitive(self, user_repository: UserRepository, test_user: User):
        found = await user_repository.get_by_email("  BUYER@example.com ")

        assert found is not None
        assert found.id == test_user.id
        assert await user_repository.get_by_email("") is None

    @pytest.mark.asyncio
    async def test_set_role_and_status(self, user_repository: UserRepository, test_user: User):
        updated = await user_repository.set_role(test_user.id, UserRole.AGENT)
        assert updated.role == UserRole.AGENT

        updated = await user_repository.set_status(test_user.email, UserStatus.FRAUD)
        assert updated.status == UserStatus.FRAUD

        assert await user_repository.set_status("missing@example.com", UserStatus.FRAUD) is None


class TestPropertyRepository:

    @pytest.mark.asyncio
    async def test_find_verified_excludes_unverified(
        self,
        property_repository: PropertyRepository,
        test_property: Property,
        test_pending_property: Property
    ):
        properties = await property_repository.find_verified()

        assert [prop.id for prop in properties] == [test_property.id]

    @pytest.mark.asyncio
    async def test_find_verified_search_is_case_insensitive(self, property_repository: PropertyRepository, test_agent: User):
        lake = await PropertyFactory.create_property(property_repository, test_agent, location="Crystal LAKE Road")
        await PropertyFactory.create_property(property_repository, test_agent, location="Mountain View")
        await PropertyFactory.create_property(
            property_repository,
            test_agent,
            location="Lakeshore",
            verification_status=VerificationStatus.REJECTED
        )

        properties = await property_repository.find_verified(search="lake")

        assert [prop.id for prop in properties] == [lake.id]

    @pytest.mark.asyncio
    async def test_find_verified_search_matches_wildcards_literally(
        self,
        property_repository: PropertyRepository,
        test_agent: User,
        test_property: Property
    ):
        await PropertyFactory.create_property(property_repository, test_agent, location="Mountain View")
        percent = await PropertyFactory.create_property(property_repository, test_agent, location="Unit 50% Lake Rd")
        underscore = await PropertyFactory.create_property(property_repository, test_agent, location="Pier_7 Marina")

        assert await property_repository.find_verified(search="%") == [percent]
        assert await property_repository.find_verified(search="_") == [underscore]
        assert await property_repository.find_verified(search="50%") == [percent]
        assert await property_repository.find_verified(search="r_7") == [underscore]

    @pytest.mark.asyncio
    async def test_find_verified_sorted_by_min_price(self, property_repository: PropertyRepository, test_agent: User):
        for price in ("300000", "100000", "200000"):
            await PropertyFactory.create_property(
                property_repository,
                test_agent,
                price_min=Decimal(price),
                price_max=Decimal(price) + 50000
            )

        properties = await property_repository.find_verified(sort_by_price=True)
        prices = [prop.price_min for prop in properties]

        assert prices == sorted(prices)
        assert len(prices) == 3

    @pytest.mark.asyncio
    async def test_delete_by_agent_only_touches_that_agent(
        self,
        property_repository: PropertyRepository,
        test_agent: User,
        other_agent: User
    ):
        await PropertyFactory.create_property(property_repository, test_agent)
        await PropertyFactory.create_property(property_repository, test_agent)
        kept = await PropertyFactory.create_property(property_repository, other_agent)

        deleted = await property_repository.delete_by_agent(test_agent.email)

        assert deleted == 2
        remaining = await property_repository.get_multi()
        assert [prop.id for prop in remaining] == [kept.id]

    @pytest.mark.asyncio
    async def test_find_by_ids_ignores_missing(self, property_repository: PropertyRepository, test_property: Property):
        found = await property_repository.find_by_ids([test_property.id, uuid.uuid4()])

        assert list(found.keys()) == [test_property.id]
        assert await property_repository.find_by_ids([]) == {}


class TestOfferRepository:

    @pytest.mark.asyncio
    async def test_bulk_update_respects_exclusion(
        self,
        offer_repository: OfferRepository,
        test_property: Property
    ):
        accepted = await OfferFactory.create_offer(offer_repository, test_property, status=OfferStatus.ACCEPTED)
        pending_a = await OfferFactory.create_offer(offer_repository, test_property)
        pending_b = await OfferFactory.create_offer(offer_repository, test_property)

        updated = await offer_repository.bulk_update_status(
            test_property.id,
            new_status=OfferStatus.REJECTED,
            excluded_status=OfferStatus.ACCEPTED
        )

        assert updated == 2
        assert (await offer_repository.get_by_id(accepted.id)).status == OfferStatus.ACCEPTED
        assert (await offer_repository.get_by_id(pending_a.id)).status == OfferStatus.REJECTED
        assert (await offer_repository.get_by_id(pending_b.id)).status == OfferStatus.REJECTED

    @pytest.mark.asyncio
    async def test_bulk_update_only_pending_keeps_decided_offers(
        self,
        offer_repository: OfferRepository,
        test_property: Property
    ):
        """A mismatched exclusion value cannot revert an accepted offer."""
        accepted = await OfferFactory.create_offer(offer_repository, test_property, status=OfferStatus.ACCEPTED)
        pending = await OfferFactory.create_offer(offer_repository, test_property)

        updated = await offer_repository.bulk_update_status(
            test_property.id,
            new_status=OfferStatus.REJECTED,
            excluded_status=OfferStatus.BOUGHT
        )

        assert updated == 1
        assert (await offer_repository.get_by_id(accepted.id)).status == OfferStatus.ACCEPTED
        assert (await offer_repository.get_by_id(pending.id)).status == OfferStatus.REJECTED

    @pytest.mark.asyncio
    async def test_bulk_update_exclude_id(self, offer_repository: OfferRepository, test_property: Property):
        chosen = await OfferFactory.create_offer(offer_repository, test_property)
        other = await OfferFactory.create_offer(offer_repository, test_property)

        updated = await offer_repository.bulk_update_status(
            test_property.id,
            new_status=OfferStatus.REJECTED,
            excluded_status=OfferStatus.ACCEPTED,
            exclude_id=chosen.id
        )

        assert updated == 1
        assert (await offer_repository.get_by_id(chosen.id)).status == OfferStatus.PENDING
        assert (await offer_repository.get_by_id(other.id)).status == OfferStatus.REJECTED

    @pytest.mark.asyncio
    async def test_find_sold_by_agent(self, offer_repository: OfferRepository, test_property: Property, test_agent: User):
        sold = await OfferFactory.create_offer(offer_repository, test_property, status=OfferStatus.BOUGHT)
        await OfferFactory.create_offer(offer_repository, test_property, status=OfferStatus.ACCEPTED)

        offers = await offer_repository.find_sold_by_agent(test_agent.email)

        assert [offer.id for offer in offers] == [sold.id]

    @pytest.mark.asyncio
    async def test_record_payment(self, offer_repository: OfferRepository, test_property: Property):
        offer = await OfferFactory.create_offer(offer_repository, test_property, status=OfferStatus.ACCEPTED)

        paid = await offer_repository.record_payment(offer.id, "pi_123")

        assert paid.status == OfferStatus.BOUGHT
        assert paid.transaction_id == "pi_123"


class TestWishlistRepository:

    @pytest.mark.asyncio
    async def test_join_tolerates_deleted_property(
        self,
        wishlist_repository: WishlistRepository,
        property_repository: PropertyRepository,
        test_user: User,
        test_property: Property,
        test_agent: User
    ):
        gone = await PropertyFactory.create_property(property_repository, test_agent, title="Gone")
        await wishlist_repository.create({"user_email": test_user.email, "property_id": test_property.id})
        await wishlist_repository.create({"user_email": test_user.email, "property_id": gone.id})
        await property_repository.delete(gone.id)

        items = await wishlist_repository.find_by_user_with_property(test_user.email)
        joined = {entry.property_id: prop for entry, prop in items}

        assert len(items) == 2
        assert joined[test_property.id].title == "Lakeside Cottage"
        assert joined[gone.id] is None

    @pytest.mark.asyncio
    async def test_get_with_property_missing_entry(self, wishlist_repository: WishlistRepository):
        assert await wishlist_repository.get_with_property(uuid.uuid4()) is None


class TestReviewRepository:

    @pytest.mark.asyncio
    async def test_find_by_reviewer_and_property(
        self,
        review_repository: ReviewRepository,
        test_property: Property,
        test_user: User
    ):
        review = await review_repository.create({
            "reviewer_email": test_user.email,
            "property_id": test_property.id,
            "property_title": test_property.title,
            "rating": 4,
            "text": "Great view",
        })

        assert [r.id for r in await review_repository.find_by_reviewer(test_user.email)] == [review.id]
        assert [r.id for r in await review_repository.find_by_property(test_property.id)] == [review.id]
        assert await review_repository.find_by_reviewer("nobody@example.com") == []
