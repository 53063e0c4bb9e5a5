from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def exists_with_role(self, role: str) -> bool:
        """Check whether any user holds the given platform role"""
        pass

    @abstractmethod
    async def detach_from_tenant(self, tenant_id: str) -> int:
        """Clear the tenant binding of every user bound to a tenant"""
        pass
