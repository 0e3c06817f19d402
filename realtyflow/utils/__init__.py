"""
Utility modules for the Realty Flow API.
"""

from .auth import (
    IdentityClaim,
    create_access_token,
    verify_token,
)

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    BadRequestError,
    UpstreamServiceError,
    TokenExpiredError,
    InvalidTokenError,
    InsufficientPermissionsError,
    OwnershipError,
    InvalidTransitionError,
    BusinessRuleViolationError,
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "IdentityClaim",
    "create_access_token",
    "verify_token",
    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "BadRequestError",
    "UpstreamServiceError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InsufficientPermissionsError",
    "OwnershipError",
    "InvalidTransitionError",
    "BusinessRuleViolationError",
]
