"""
Hard Delete Tenant Use Case

Irreversible purge of a tenant and everything it owns.
"""

import logging

from libs.result import Result, Return
from src.app.errors import NotFoundError
from src.app.services.authorization import check_platform_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.dtos import Actor
from src.domain.entities import AuditEvent

from .dtos import HardDeleteTenantResponse

logger = logging.getLogger(__name__)


class HardDeleteTenantUseCase:
    """
    Permanently delete a tenant.

    Business Rules:
    - Caller must be a platform administrator
    - Works on active and soft-deleted tenants alike
    - Deletes invitations, employees and the organization with the tenant
    - Users survive; their tenant binding is cleared and tenant admins
      fall back to MEMBER
    - Audit events are kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor, tenant_id: str) -> Result[HardDeleteTenantResponse]:
        denied = check_platform_admin(actor.role)
        if denied:
            return Return.err(denied)

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id, include_deleted=True)
            if tenant is None:
                return Return.err(NotFoundError("TENANT_NOT_FOUND", "Tenant not found"))

            # 1. Detach users, then remove owned rows, then the tenant
            users_detached = await self.uow.users.detach_from_tenant(tenant_id)
            invitations_deleted = await self.uow.invitations.delete_by_tenant_id(tenant_id)
            employees_deleted = await self.uow.employees.delete_by_tenant_id(tenant_id)
            await self.uow.organizations.delete_by_tenant_id(tenant_id)
            await self.uow.tenants.delete(tenant_id)

            # 2. Audit trail outlives the tenant
            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=actor.user_id,
                    action="tenant_hard_deleted",
                    event_metadata={
                        "invitations_deleted": invitations_deleted,
                        "employees_deleted": employees_deleted,
                        "users_detached": users_detached,
                    },
                )
            )

            await self.uow.commit()

        logger.warning(f"Tenant {tenant_id} permanently deleted by {actor.user_id}")
        return Return.ok(
            HardDeleteTenantResponse(
                tenant_id=tenant_id,
                invitations_deleted=invitations_deleted,
                employees_deleted=employees_deleted,
                users_detached=users_detached,
            )
        )
