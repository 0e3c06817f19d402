"""
Offer model for purchase offers made by buyers against verified listings.
"""

from sqlalchemy import String, Numeric, Enum as SQLEnum, Uuid, Index
from sqlalchemy.orm import Mapped, mapped_column
from realtyflow.database import Base
from decimal import Decimal
from typing import Optional
import enum
import uuid


class OfferStatus(str, enum.Enum):
    """
    Offer negotiation state.
    Pending -> Accepted | Rejected (agent), Accepted -> Bought (payment).
    """
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    BOUGHT = "Bought"


class Offer(Base):
    """
    Purchase offer. property_id is a reference, not an ownership link:
    offers survive the deletion of the listing they point at.
    """
    
    __tablename__ = "offers"
    
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
        comment="Referenced property"
    )
    
    # Snapshot of the listing at offer time
    property_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    property_location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    property_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    
    buyer_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True
    )
    
    buyer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    
    agent_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True
    )
    
    agent_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    
    offered_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False
    )
    
    status: Mapped[OfferStatus] = mapped_column(
        SQLEnum(OfferStatus),
        nullable=False,
        default=OfferStatus.PENDING,
        index=True
    )
    
    transaction_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Gateway transaction id, set on successful payment"
    )
    
    __table_args__ = (
        Index("idx_offer_property_status", "property_id", "status"),
        Index("idx_offer_agent_status", "agent_email", "status"),
    )
    
    def __repr__(self) -> str:
        return f"<Offer(id={self.id}, property_id={self.property_id}, status={self.status})>"
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "property_title": self.property_title,
            "property_location": self.property_location,
            "property_image": self.property_image,
            "buyer_email": self.buyer_email,
            "buyer_name": self.buyer_name,
            "agent_email": self.agent_email,
            "agent_name": self.agent_name,
            "offered_price": float(self.offered_price),
            "status": self.status.value,
            "transaction_id": self.transaction_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
