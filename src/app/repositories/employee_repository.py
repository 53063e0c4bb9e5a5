from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Employee


class IEmployeeRepository(ABC):
    """Employee repository interface - application layer"""

    @abstractmethod
    async def get_by_tenant_and_user(self, tenant_id: str, user_id: str) -> Optional[Employee]:
        """Get employee row by tenant and user"""
        pass

    @abstractmethod
    async def create(self, employee: Employee) -> Employee:
        """Create a new employee"""
        pass

    @abstractmethod
    async def add_if_absent(self, employee: Employee) -> Employee:
        """
        Insert an employee, doing nothing if (tenant_id, user_id) already exists.

        Returns the stored row either way.
        """
        pass

    @abstractmethod
    async def delete_by_tenant_id(self, tenant_id: str) -> int:
        """Delete every employee of a tenant"""
        pass
