"""
Review model. Reviews are written once and never edited.
"""

from sqlalchemy import String, Text, Integer, Uuid, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional
import uuid

from realtyflow.database import Base


class Review(Base):
    __tablename__ = "reviews"
    
    reviewer_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    reviewer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reviewer_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    
    property_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    property_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    agent_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="check_review_rating"),
    )
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "reviewer_email": self.reviewer_email,
            "reviewer_name": self.reviewer_name,
            "reviewer_image": self.reviewer_image,
            "property_id": str(self.property_id),
            "property_title": self.property_title,
            "agent_name": self.agent_name,
            "rating": self.rating,
            "text": self.text,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
