"""
Soft Delete Tenant Use Case

Hides a tenant from every lookup while keeping its history for recovery.
"""

from libs.result import Result, Return
from src.app.errors import NotFoundError
from src.app.services.authorization import check_platform_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import TenantView
from src.app.use_cases.users.dtos import Actor
from src.domain.base import utcnow
from src.domain.entities import AuditEvent


class SoftDeleteTenantUseCase:
    """
    Business Rules:
    - Caller must be a platform administrator
    - Sets deleted=true and deleted_at=now; nothing else changes
    - Already-deleted tenants are not found
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor, tenant_id: str) -> Result[TenantView]:
        denied = check_platform_admin(actor.role)
        if denied:
            return Return.err(denied)

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(NotFoundError("TENANT_NOT_FOUND", "Tenant not found"))

            tenant.deleted = True
            tenant.deleted_at = utcnow()
            tenant = await self.uow.tenants.update(tenant)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=actor.user_id,
                    action="tenant_soft_deleted",
                    event_metadata={"deleted_at": tenant.deleted_at.isoformat()},
                )
            )

            await self.uow.commit()

            return Return.ok(TenantView.from_entity(tenant))
