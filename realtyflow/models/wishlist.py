"""
Wishlist entry model: a user's bookmark of a property.
"""

from sqlalchemy import String, Uuid, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from realtyflow.database import Base


class WishlistEntry(Base):
    __tablename__ = "wishlist"
    
    user_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
        comment="Referenced property; may point at a deleted listing"
    )
    
    __table_args__ = (
        UniqueConstraint("user_email", "property_id", name="uq_wishlist_user_property"),
    )
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "user_email": self.user_email,
            "property_id": str(self.property_id),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
