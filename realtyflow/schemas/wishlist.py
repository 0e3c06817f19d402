"""
Pydantic schemas for wishlist entries.
"""

from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from realtyflow.schemas.property import PropertyResponse


class WishlistCreate(BaseModel):
    property_id: UUID = Field(..., description="Property to bookmark")


class WishlistEntryResponse(BaseModel):
    id: str
    user_email: str
    property_id: str
    created_at: Optional[str] = None


class WishlistItemResponse(WishlistEntryResponse):
    """Entry joined with the current state of its property; None once the listing is gone."""
    
    property: Optional[PropertyResponse] = None


class WishlistDeleteResponse(BaseModel):
    deleted: bool
    id: str
