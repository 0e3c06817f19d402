"""
User repository for registration, role lookup and account administration.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from realtyflow.repositories.base import BaseRepository
from realtyflow.models.user import User, UserRole, UserStatus
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts keyed by email.
    """
    
    def __init__(self, db: AsyncSession):
        super().__init__(User, db)
    
    async def create_user(self, user_data: Dict[str, Any], commit: bool = True) -> User:
        """
        Create a new user with a normalized email.
        
        Args:
            user_data: Must include email; optional name, image, role, status
            
        Raises:
            ValueError: If the email is malformed
        """
        email = User.validate_email_format(user_data["email"])
        create_data = {
            **user_data,
            "email": email,
            "role": user_data.get("role") or UserRole.USER,
            "status": user_data.get("status") or UserStatus.ACTIVE,
        }
        created_user = await self.create(create_data, commit=commit)
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user
    
    async def get_by_email(self, email: str, for_update: bool = False) -> Optional[User]:
        """
        Get user by email address, optionally locking the row.
        
        Returns:
            User instance if found, None otherwise
        """
        if not email:
            return None
        return await self.get_by_field("email", email.lower().strip(), for_update=for_update)
    
    async def get_all(self) -> List[User]:
        return await self.get_multi(order_by="created_at")
    
    async def set_role(self, user_id: uuid.UUID, role: UserRole, commit: bool = True) -> Optional[User]:
        user = await self.update(user_id, {"role": role}, commit=commit)
        if user:
            logger.info(f"User {user.email} role set to {role.value}")
        return user
    
    async def set_status(self, email: str, status: UserStatus, commit: bool = True) -> Optional[User]:
        user = await self.get_by_email(email, for_update=True)
        if user is None:
            return None
        return await self.update(user.id, {"status": status}, commit=commit)
    
    async def delete_user(self, user_id: uuid.UUID, commit: bool = True) -> bool:
        deleted = await self.delete(user_id, commit=commit)
        if deleted:
            logger.info(f"Deleted user {user_id}")
        return deleted
