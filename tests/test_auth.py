"""
Tests for credential issuance and the authorization gate.
"""

import pytest
from datetime import timedelta
from httpx import AsyncClient

from realtyflow.models.user import User, UserRole
from realtyflow.models.property import Property, VerificationStatus
from realtyflow.repositories.property import PropertyRepository
from realtyflow.repositories.user import UserRepository
from realtyflow.services.auth import AuthService
from realtyflow.utils.auth import (
    create_access_token,
    verify_token,
    JWTError,
)
from realtyflow.utils.exceptions import InvalidTokenError, TokenExpiredError
from tests.conftest import make_token, auth_headers


class TestTokenUtilities:
    """Test token encoding helpers."""

    def test_token_round_trip_carries_identity(self):
        token = create_access_token({"email": "buyer@example.com", "name": "Buyer"})

        claim = verify_token(token)

        assert claim.email == "buyer@example.com"
        assert claim.extra["name"] == "Buyer"
        assert claim.exp > claim.iat

    def test_role_is_never_embedded(self):
        """A client-submitted role must not end up in the credential."""
        token = create_access_token({"email": "buyer@example.com", "role": "Admin"})

        claim = verify_token(token)

        assert "role" not in claim.extra

    def test_default_validity_is_thirty_days(self):
        claim = verify_token(create_access_token({"email": "buyer@example.com"}))

        assert claim.exp - claim.iat == timedelta(days=30)

    def test_payload_without_email_is_rejected(self):
        token = create_access_token({"name": "Nobody"})

        with pytest.raises(JWTError):
            verify_token(token)


class TestAuthService:
    """Test AuthService functionality."""

    def test_issue_token(self):
        token, expires_in = AuthService().issue_token({"email": "buyer@example.com"})

        assert verify_token(token).email == "buyer@example.com"
        assert expires_in == 30 * 24 * 3600

    def test_decode_expired_token(self):
        token = make_token("buyer@example.com", expires_delta=timedelta(seconds=-10))

        with pytest.raises(TokenExpiredError):
            AuthService().decode_claim(token)

    def test_decode_tampered_token(self):
        token = make_token("buyer@example.com")

        with pytest.raises(InvalidTokenError):
            AuthService().decode_claim(token[:-4] + "abcd")


class TestTokenEndpoint:
    """Test POST /api/jwt."""

    @pytest.mark.asyncio
    async def test_issue_token_for_identity(self, async_client: AsyncClient):
        response = await async_client.post("/api/jwt", json={"email": "Buyer@Example.com", "name": "Buyer"})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert verify_token(data["token"]).email == "buyer@example.com"

    @pytest.mark.asyncio
    async def test_issue_token_requires_email(self, async_client: AsyncClient):
        response = await async_client.post("/api/jwt", json={"name": "Nobody"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestAuthorizationGate:
    """Authentication precedes authorization; roles are read on every request."""

    @pytest.mark.asyncio
    async def test_missing_credential_is_401(self, async_client: AsyncClient):
        response = await async_client.get("/api/users")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "unauthorized access"

    @pytest.mark.asyncio
    async def test_malformed_credential_is_401(self, async_client: AsyncClient):
        response = await async_client.get("/api/users", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_credential_is_401(self, async_client: AsyncClient, test_admin: User):
        token = make_token(test_admin.email, expires_delta=timedelta(seconds=-10))

        response = await async_client.get("/api/users", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    @pytest.mark.asyncio
    async def test_wrong_role_is_403(self, async_client: AsyncClient, test_user: User):
        response = await async_client.get("/api/users", headers=auth_headers(test_user.email))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_unregistered_subject_is_403(self, async_client: AsyncClient):
        response = await async_client.get("/api/users", headers=auth_headers("ghost@example.com"))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_is_admitted(self, async_client: AsyncClient, test_admin: User):
        response = await async_client.get("/api/users", headers=auth_headers(test_admin.email))

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_role_change_applies_to_existing_credential(
        self,
        async_client: AsyncClient,
        user_repository: UserRepository,
        test_admin: User
    ):
        """Revoking a role takes effect on the very next request with the same token."""
        headers = auth_headers(test_admin.email)
        assert (await async_client.get("/api/users", headers=headers)).status_code == 200

        await user_repository.set_role(test_admin.id, UserRole.USER)

        response = await async_client.get("/api/users", headers=headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_agent_guard_rejects_admin(self, async_client: AsyncClient, test_admin: User):
        response = await async_client.get(
            f"/api/properties/{test_admin.email}",
            headers=auth_headers(test_admin.email)
        )

        assert response.status_code == 403


ADMIN_ROUTES = [
    ("get", lambda user, prop: "/api/users", None),
    ("patch", lambda user, prop: f"/api/users/role/{user.id}", {"role": "Admin"}),
    ("patch", lambda user, prop: f"/api/users/status/{user.email}", {"status": "Fraud"}),
    ("delete", lambda user, prop: f"/api/users?id={user.id}&uid=firebase-uid", None),
    ("get", lambda user, prop: "/api/properties", None),
    ("patch", lambda user, prop: f"/api/property/status/{prop.id}", {"verification_status": "Rejected"}),
]


class TestAdminRoutes:
    """Every admin-only route refuses User and Agent subjects without side effects."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("caller_fixture", ["test_user", "test_agent"])
    @pytest.mark.parametrize("method,build_url,body", ADMIN_ROUTES)
    async def test_non_admin_is_403(
        self,
        request,
        async_client: AsyncClient,
        property_repository: PropertyRepository,
        user_repository: UserRepository,
        identity_provider,
        test_user: User,
        test_agent: User,
        test_pending_property: Property,
        caller_fixture,
        method,
        build_url,
        body
    ):
        caller = request.getfixturevalue(caller_fixture)
        kwargs = {"headers": auth_headers(caller.email)}
        if body is not None:
            kwargs["json"] = body

        response = await async_client.request(
            method.upper(), build_url(test_agent, test_pending_property), **kwargs
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

        agent = await user_repository.get_by_email(test_agent.email)
        assert agent is not None
        assert agent.role == UserRole.AGENT
        assert not agent.is_fraud
        assert identity_provider.deleted == []

        listing = await property_repository.get_by_id(test_pending_property.id)
        assert listing is not None
        assert listing.verification_status == VerificationStatus.PENDING
