"""
Suspend Tenant Use Case
"""

from typing import Optional

from libs.result import Result, Return
from src.app.services.authorization import check_platform_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import TenantView
from src.app.use_cases.users.dtos import Actor
from src.domain.entities import TenantStatus

from .moderation import transition_tenant


class SuspendTenantUseCase:
    """
    Suspend an approved (or reinstated) tenant.

    Business Rules:
    - Caller must be a platform administrator
    - APPROVED or REINSTATED -> SUSPENDED, logged in the moderation log
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: Actor, tenant_id: str, reason: Optional[str] = None
    ) -> Result[TenantView]:
        denied = check_platform_admin(actor.role)
        if denied:
            return Return.err(denied)

        async with self.uow:
            result = await transition_tenant(
                self.uow, tenant_id, TenantStatus.suspended, actor.user_id, reason
            )
            if result.is_err():
                return result

            organization = await self.uow.organizations.get_by_tenant_id(tenant_id)
            await self.uow.commit()

            return Return.ok(TenantView.from_entity(result.value, organization))
