"""
Get Tenant Use Case
"""

from libs.result import Result, Return
from src.app.errors import ForbiddenError, NotFoundError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.dtos import Actor

from .dtos import TenantView


class GetTenantUseCase:
    """
    Use case for reading one tenant with its organization.

    Business Rules:
    - Platform administrators may read any tenant
    - Other callers must be employees of the tenant
    - Soft-deleted tenants are not found
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor, tenant_id: str) -> Result[TenantView]:
        async with self.uow:
            if not actor.is_platform_admin:
                employee = await self.uow.employees.get_by_tenant_and_user(
                    tenant_id, actor.user_id
                )
                if employee is None:
                    return Return.err(
                        ForbiddenError("TENANT_ACCESS_REQUIRED", "Tenant access required")
                    )

            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(NotFoundError("TENANT_NOT_FOUND", "Tenant not found"))

            organization = await self.uow.organizations.get_by_tenant_id(tenant_id)
            return Return.ok(TenantView.from_entity(tenant, organization))
