"""
Pydantic schemas for offers, agent decisions and payment completion.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional
from decimal import Decimal
from uuid import UUID
from realtyflow.models.offer import OfferStatus


class OfferCreate(BaseModel):
    property_id: UUID = Field(..., description="Verified property the offer is for")
    offered_price: Decimal = Field(..., gt=0, examples=[275000])
    buyer_name: Optional[str] = Field(None, max_length=255)


class OfferStatusUpdate(BaseModel):
    """Agent decision on a single offer."""
    
    status: OfferStatus = Field(..., examples=["Accepted"])


class BulkStatusUpdate(BaseModel):
    """
    Status written to the competing offers on a property.
    Offers whose status equals ``excluded_status`` are not touched.
    """
    
    new_status: OfferStatus = Field(OfferStatus.REJECTED, examples=["Rejected"])
    excluded_status: OfferStatus = Field(..., examples=["Accepted"])


class BulkStatusResponse(BaseModel):
    property_id: str
    updated: int


class OfferDecision(BaseModel):
    """Decide one offer and move every other pending offer on the property."""
    
    status: OfferStatus = Field(..., examples=["Accepted"])
    others_status: OfferStatus = Field(OfferStatus.REJECTED, examples=["Rejected"])
    
    @model_validator(mode="after")
    def validate_statuses(self):
        decided = (OfferStatus.ACCEPTED, OfferStatus.REJECTED)
        if self.status not in decided or self.others_status not in decided:
            raise ValueError("Decisions must be Accepted or Rejected")
        return self


class OfferDecisionResponse(BaseModel):
    offer: "OfferResponse"
    others_updated: int


class PaymentCompletion(BaseModel):
    transaction_id: str = Field(..., min_length=1, max_length=255, examples=["pi_3Nx..."])


class OfferResponse(BaseModel):
    id: str
    property_id: str
    property_title: Optional[str] = None
    property_location: Optional[str] = None
    property_image: Optional[str] = None
    buyer_email: str
    buyer_name: Optional[str] = None
    agent_email: str
    agent_name: Optional[str] = None
    offered_price: float
    status: OfferStatus
    transaction_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


OfferDecisionResponse.model_rebuild()
