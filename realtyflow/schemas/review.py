"""
Pydantic schemas for reviews.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID


class ReviewCreate(BaseModel):
    property_id: UUID
    rating: int = Field(..., ge=1, le=5, examples=[5])
    text: str = Field(..., min_length=1, max_length=5000)
    
    @field_validator("text")
    @classmethod
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError("Review text cannot be empty")
        return v.strip()


class ReviewResponse(BaseModel):
    id: str
    reviewer_email: str
    reviewer_name: Optional[str] = None
    reviewer_image: Optional[str] = None
    property_id: str
    property_title: Optional[str] = None
    agent_name: Optional[str] = None
    rating: int
    text: str
    created_at: Optional[str] = None
