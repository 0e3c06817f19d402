"""
Database models for the Realty Flow API.
Includes the User, Property, Offer, WishlistEntry and Review collections.
"""

from realtyflow.models.user import User, UserRole, UserStatus
from realtyflow.models.property import Property, VerificationStatus
from realtyflow.models.offer import Offer, OfferStatus
from realtyflow.models.wishlist import WishlistEntry
from realtyflow.models.review import Review

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "Property",
    "VerificationStatus",
    "Offer",
    "OfferStatus",
    "WishlistEntry",
    "Review",
]
