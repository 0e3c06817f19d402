"""
User account endpoints: self-registration, self lookup, and admin management.
"""

from fastapi import APIRouter, Depends, Path, Query, Response, status
from typing import List
from uuid import UUID

from realtyflow.models.user import User
from realtyflow.schemas.user import (
    UserCreate,
    UserResponse,
    RegistrationResponse,
    RoleUpdate,
    StatusUpdate,
    StatusUpdateResponse,
    UserDeleteResponse,
)
from realtyflow.schemas.error import (
    get_common_error_responses,
    get_lookup_error_responses,
    get_upstream_error_responses,
)
from realtyflow.services.user import UserService
from realtyflow.utils.auth import IdentityClaim
from realtyflow.utils.dependencies import get_current_claim, get_user_service, require_admin


router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Idempotent self-registration. Registering an existing email returns the existing account with 200."
)
async def register_user(
    user_data: UserCreate,
    response: Response,
    user_service: UserService = Depends(get_user_service)
) -> RegistrationResponse:
    user, created = await user_service.register(user_data)
    if not created:
        response.status_code = status.HTTP_200_OK
    return RegistrationResponse(
        message="User created" if created else "User already exists",
        created=created,
        user=UserResponse.model_validate(user.to_dict())
    )


@router.get(
    "/user/{email}",
    response_model=UserResponse,
    summary="Get own account",
    responses=get_lookup_error_responses()
)
async def get_self(
    email: str = Path(..., description="Caller's email"),
    claim: IdentityClaim = Depends(get_current_claim),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.get_self(email, claim)
    return UserResponse.model_validate(user.to_dict())


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List users",
    description="All accounts. Admin only.",
    responses=get_common_error_responses()
)
async def list_users(
    admin: User = Depends(require_admin),
    user_service: UserService = Depends(get_user_service)
) -> List[UserResponse]:
    users = await user_service.list_users()
    return [UserResponse.model_validate(user.to_dict()) for user in users]


@router.patch(
    "/users/role/{user_id}",
    response_model=UserResponse,
    summary="Change user role",
    description="Admin only. Takes effect on the subject's next request.",
    responses=get_lookup_error_responses()
)
async def set_user_role(
    role_data: RoleUpdate,
    user_id: UUID = Path(..., description="User ID"),
    admin: User = Depends(require_admin),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.set_role(user_id, role_data.role)
    return UserResponse.model_validate(user.to_dict())


@router.patch(
    "/users/status/{email}",
    response_model=StatusUpdateResponse,
    summary="Change account status",
    description="Admin only. Marking a user as Fraud deletes every property listed under their email.",
    responses=get_lookup_error_responses()
)
async def set_user_status(
    status_data: StatusUpdate,
    email: str = Path(..., description="User email"),
    admin: User = Depends(require_admin),
    user_service: UserService = Depends(get_user_service)
) -> StatusUpdateResponse:
    user, deleted = await user_service.set_status(email, status_data.status)
    return StatusUpdateResponse(
        user=UserResponse.model_validate(user.to_dict()),
        deleted_properties=deleted
    )


@router.delete(
    "/users",
    response_model=UserDeleteResponse,
    summary="Delete user",
    description=(
        "Admin only. Deletes the account and revokes its external identity. "
        "If revocation fails the account stays deleted and 502 is returned."
    ),
    responses={**get_lookup_error_responses(), **get_upstream_error_responses()}
)
async def delete_user(
    id: UUID = Query(..., description="User ID"),
    uid: str = Query(..., min_length=1, description="External identity provider uid"),
    admin: User = Depends(require_admin),
    user_service: UserService = Depends(get_user_service)
) -> UserDeleteResponse:
    revoked = await user_service.delete_user(id, uid)
    return UserDeleteResponse(deleted=True, identity_revoked=revoked)
