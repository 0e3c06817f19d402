"""
Pydantic schemas for user registration and administration.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from realtyflow.models.user import UserRole, UserStatus


class UserCreate(BaseModel):
    """Self-registration payload."""
    
    email: EmailStr = Field(..., description="User's email address", examples=["buyer@example.com"])
    name: Optional[str] = Field(None, max_length=255, description="Display name")
    image: Optional[str] = Field(None, max_length=1024, description="Profile image URL")
    
    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()
    
    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if v else v


class UserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    role: UserRole
    status: UserStatus
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class RegistrationResponse(BaseModel):
    """Registration result; ``created`` is False when the email was already registered."""
    
    message: str
    created: bool
    user: UserResponse


class RoleUpdate(BaseModel):
    role: UserRole = Field(..., description="New role", examples=["Agent"])


class StatusUpdate(BaseModel):
    status: UserStatus = Field(..., description="New account status", examples=["Fraud"])


class StatusUpdateResponse(BaseModel):
    user: UserResponse
    deleted_properties: int = Field(0, description="Listings removed by the fraud cascade")


class UserDeleteResponse(BaseModel):
    deleted: bool
    identity_revoked: bool
