"""
User model with role and fraud-status management.
Covers ordinary users, verified agents and administrators.
"""

from sqlalchemy import String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from realtyflow.database import Base
from email_validator import validate_email, EmailNotValidError
from typing import Optional
import enum


class UserRole(str, enum.Enum):
    """User role enumeration for role-based access control."""
    USER = "User"
    AGENT = "Agent"
    ADMIN = "Admin"


class UserStatus(str, enum.Enum):
    """Account standing. Fraud is set by an admin and cascades to listings."""
    ACTIVE = "Active"
    FRAUD = "Fraud"


class User(Base):
    """
    User account keyed by email.
    Email is the join key used by every other collection.
    """
    
    __tablename__ = "users"
    
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - unique join key"
    )
    
    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Display name"
    )
    
    image: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True,
        comment="Profile image URL"
    )
    
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole),
        nullable=False,
        default=UserRole.USER,
        index=True,
        comment="User role for access control"
    )
    
    status: Mapped[UserStatus] = mapped_column(
        SQLEnum(UserStatus),
        nullable=False,
        default=UserStatus.ACTIVE,
        comment="Account standing"
    )
    
    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
    
    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.
        
        Args:
            email: Email address to validate
            
        Returns:
            Normalized email address
            
        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")
    
    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
    
    @property
    def is_agent(self) -> bool:
        return self.role == UserRole.AGENT
    
    @property
    def is_fraud(self) -> bool:
        return self.status == UserStatus.FRAUD
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "email": self.email,
            "name": self.name,
            "image": self.image,
            "role": self.role.value,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
