"""
Pydantic schemas for credential issuance.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional


class TokenRequest(BaseModel):
    """Identity payload submitted after sign-in with the external identity provider."""
    
    model_config = ConfigDict(extra="allow")
    
    email: EmailStr = Field(..., description="Subject email", examples=["buyer@example.com"])
    name: Optional[str] = Field(None, max_length=255)
    
    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class TokenResponse(BaseModel):
    token: str = Field(..., description="Bearer credential")
    token_type: str = Field("bearer")
    expires_in: int = Field(..., description="Validity in seconds")
