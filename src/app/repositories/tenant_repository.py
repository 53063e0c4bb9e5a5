from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.domain.entities import Tenant, TenantStatus


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: str, include_deleted: bool = False) -> Optional[Tenant]:
        """Get tenant by ID; soft-deleted tenants are hidden unless asked for"""
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[TenantStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Tenant], int]:
        """List non-deleted tenants; returns (page items, total count)"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        pass

    @abstractmethod
    async def apply_transition(
        self,
        tenant_id: str,
        expected_revision: int,
        status: TenantStatus,
        moderation_log: List[dict],
    ) -> Optional[Tenant]:
        """
        Write a status change if the tenant is still at ``expected_revision``.

        Returns the refreshed tenant, or None when another transition got there first.
        """
        pass

    @abstractmethod
    async def delete(self, tenant_id: str) -> None:
        """Permanently delete a tenant row"""
        pass
