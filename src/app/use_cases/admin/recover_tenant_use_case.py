"""
Recover Tenant Use Case
"""

from libs.result import Result, Return
from src.app.errors import NotFoundError
from src.app.services.authorization import check_platform_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import TenantView
from src.app.use_cases.users.dtos import Actor
from src.domain.entities import AuditEvent


class RecoverTenantUseCase:
    """
    Undo a soft delete.

    Business Rules:
    - Caller must be a platform administrator
    - Only soft-deleted tenants can be recovered
    - Status and moderation log are untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor, tenant_id: str) -> Result[TenantView]:
        denied = check_platform_admin(actor.role)
        if denied:
            return Return.err(denied)

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id, include_deleted=True)
            if tenant is None or not tenant.deleted:
                return Return.err(
                    NotFoundError("TENANT_NOT_FOUND", "Tenant not found or not deleted")
                )

            tenant.deleted = False
            tenant.deleted_at = None
            tenant = await self.uow.tenants.update(tenant)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=actor.user_id,
                    action="tenant_recovered",
                )
            )

            await self.uow.commit()

            organization = await self.uow.organizations.get_by_tenant_id(tenant_id)
            return Return.ok(TenantView.from_entity(tenant, organization))
