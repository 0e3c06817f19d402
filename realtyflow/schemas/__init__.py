"""
Pydantic schemas for request/response validation.
"""

from .auth import TokenRequest, TokenResponse
from .user import (
    UserCreate,
    UserResponse,
    RegistrationResponse,
    RoleUpdate,
    StatusUpdate,
    StatusUpdateResponse,
    UserDeleteResponse,
)
from .property import (
    PriceRange,
    PropertyCreate,
    PropertyUpdate,
    VerificationUpdate,
    PropertyResponse,
    PropertyDeleteResponse,
)
from .offer import (
    OfferCreate,
    OfferStatusUpdate,
    BulkStatusUpdate,
    BulkStatusResponse,
    OfferDecision,
    OfferDecisionResponse,
    PaymentCompletion,
    OfferResponse,
)
from .wishlist import WishlistCreate, WishlistEntryResponse, WishlistItemResponse, WishlistDeleteResponse
from .review import ReviewCreate, ReviewResponse
from .payment import PaymentIntentRequest, PaymentIntentResponse

__all__ = [
    "TokenRequest",
    "TokenResponse",
    "UserCreate",
    "UserResponse",
    "RegistrationResponse",
    "RoleUpdate",
    "StatusUpdate",
    "StatusUpdateResponse",
    "UserDeleteResponse",
    "PriceRange",
    "PropertyCreate",
    "PropertyUpdate",
    "VerificationUpdate",
    "PropertyResponse",
    "PropertyDeleteResponse",
    "OfferCreate",
    "OfferStatusUpdate",
    "BulkStatusUpdate",
    "BulkStatusResponse",
    "OfferDecision",
    "OfferDecisionResponse",
    "PaymentCompletion",
    "OfferResponse",
    "WishlistCreate",
    "WishlistEntryResponse",
    "WishlistItemResponse",
    "WishlistDeleteResponse",
    "ReviewCreate",
    "ReviewResponse",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
]
