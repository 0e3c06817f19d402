"""
Property model for listings published by agents.
Carries a denormalized copy of the agent's profile and the verification state.
"""

from sqlalchemy import String, Text, Numeric, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column
from realtyflow.database import Base
from decimal import Decimal
from typing import Optional
import enum


class VerificationStatus(str, enum.Enum):
    """
    Listing verification state.
    Pending is initial; Verified and Rejected are final for listing purposes.
    """
    PENDING = "Pending"
    VERIFIED = "Verified"
    REJECTED = "Rejected"


class Property(Base):
    """
    Property listing owned by an agent.
    Ownership is the agent's email; there is no foreign key to users.
    """
    
    __tablename__ = "properties"
    
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )
    
    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Property location/address"
    )
    
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Detailed property description"
    )
    
    image: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True,
        comment="Listing image URL"
    )
    
    price_min: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        index=True,
        comment="Lower bound of the asking price range"
    )
    
    price_max: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Upper bound of the asking price range"
    )
    
    # Denormalized agent profile
    agent_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Email of the listing agent"
    )
    
    agent_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True
    )
    
    agent_image: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True
    )
    
    verification_status: Mapped[VerificationStatus] = mapped_column(
        SQLEnum(VerificationStatus),
        nullable=False,
        default=VerificationStatus.PENDING,
        index=True,
        comment="Admin-controlled verification state"
    )
    
    __table_args__ = (
        Index("idx_property_status_price", "verification_status", "price_min"),
    )
    
    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title}, status={self.verification_status})>"
    
    @property
    def is_verified(self) -> bool:
        return self.verification_status == VerificationStatus.VERIFIED
    
    def is_owned_by(self, email: str) -> bool:
        return self.agent_email == email
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "location": self.location,
            "description": self.description,
            "image": self.image,
            "price_range": {
                "min": float(self.price_min),
                "max": float(self.price_max),
            },
            "agent": {
                "email": self.agent_email,
                "name": self.agent_name,
                "image": self.agent_image,
            },
            "verification_status": self.verification_status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
