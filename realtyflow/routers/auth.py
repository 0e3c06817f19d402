"""
Credential issuance endpoint.
"""

from fastapi import APIRouter, Depends, status
from realtyflow.schemas.auth import TokenRequest, TokenResponse
from realtyflow.services.auth import AuthService
from realtyflow.utils.dependencies import get_auth_service


router = APIRouter(tags=["Authentication"])


@router.post(
    "/jwt",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Issue credential",
    description="Sign a bearer credential for an identity established with the external identity provider."
)
async def issue_token(
    identity: TokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    token, expires_in = auth_service.issue_token(identity.model_dump(exclude_none=True))
    return TokenResponse(token=token, expires_in=expires_in)
