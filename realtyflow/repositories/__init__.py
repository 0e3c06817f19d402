"""
Repository layer for data access operations.
"""

from realtyflow.repositories.base import BaseRepository
from realtyflow.repositories.user import UserRepository
from realtyflow.repositories.property import PropertyRepository
from realtyflow.repositories.offer import OfferRepository
from realtyflow.repositories.wishlist import WishlistRepository
from realtyflow.repositories.review import ReviewRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PropertyRepository",
    "OfferRepository",
    "WishlistRepository",
    "ReviewRepository",
]
