"""
Pydantic schemas for property requests and responses.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from decimal import Decimal
from realtyflow.models.property import VerificationStatus


class PriceRange(BaseModel):
    """Asking price range."""
    
    min: Decimal = Field(..., ge=0, description="Lowest acceptable price", examples=[250000])
    max: Decimal = Field(..., ge=0, description="Highest asking price", examples=[300000])
    
    @model_validator(mode="after")
    def validate_bounds(self):
        if self.max < self.min:
            raise ValueError("Maximum price must not be lower than minimum price")
        return self


class PropertyBase(BaseModel):
    title: str = Field(..., min_length=3, max_length=255, examples=["Lakeside cottage"])
    location: str = Field(..., min_length=2, max_length=255, examples=["Lake Placid, NY"])
    description: Optional[str] = Field(None, max_length=5000)
    image: Optional[str] = Field(None, max_length=1024, description="Listing image URL")
    price_range: PriceRange
    
    @field_validator("title", "location")
    @classmethod
    def strip_text(cls, v):
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class PropertyCreate(PropertyBase):
    """
    Listing payload. The agent profile is taken from the caller's account,
    and verification always starts at Pending.
    """


class PropertyUpdate(BaseModel):
    """Fields the owning agent may edit."""
    
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    location: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    image: Optional[str] = Field(None, max_length=1024)
    price_range: Optional[PriceRange] = None


class VerificationUpdate(BaseModel):
    verification_status: VerificationStatus = Field(..., examples=["Verified"])


class AgentProfile(BaseModel):
    email: str
    name: Optional[str] = None
    image: Optional[str] = None


class PriceRangeResponse(BaseModel):
    min: float
    max: float


class PropertyResponse(BaseModel):
    id: str
    title: str
    location: str
    description: Optional[str] = None
    image: Optional[str] = None
    price_range: PriceRangeResponse
    agent: AgentProfile
    verification_status: VerificationStatus
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PropertyDeleteResponse(BaseModel):
    deleted: bool
    id: str
