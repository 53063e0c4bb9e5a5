from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Organization


class IOrganizationRepository(ABC):
    """Organization repository interface - application layer"""

    @abstractmethod
    async def get_by_tenant_id(self, tenant_id: str) -> Optional[Organization]:
        """Get the organization profile of a tenant"""
        pass

    @abstractmethod
    async def create(self, organization: Organization) -> Organization:
        """Create a new organization"""
        pass

    @abstractmethod
    async def update(self, organization: Organization) -> Organization:
        """Update existing organization"""
        pass

    @abstractmethod
    async def delete_by_tenant_id(self, tenant_id: str) -> int:
        """Delete the organization of a tenant"""
        pass
