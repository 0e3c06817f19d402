"""
Service layer: business rules and the entity lifecycle engine.
"""

from .auth import AuthService
from .user import UserService
from .property import PropertyService
from .offer import OfferService
from .payment import PaymentService
from .wishlist import WishlistService
from .review import ReviewService
from .identity import IdentityProviderClient
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "UserService",
    "PropertyService",
    "OfferService",
    "PaymentService",
    "WishlistService",
    "ReviewService",
    "IdentityProviderClient",
    "ErrorHandlerService",
]
