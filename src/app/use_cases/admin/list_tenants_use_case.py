"""
List Tenants Use Case
"""

from typing import Optional

from libs.result import Result, Return
from src.app.services.authorization import check_platform_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import Page, check_pagination
from src.app.use_cases.tenants.dtos import TenantView
from src.app.use_cases.users.dtos import Actor
from src.domain.entities import TenantStatus


class ListTenantsUseCase:
    """
    Business Rules:
    - Caller must be a platform administrator
    - Soft-deleted tenants are never listed
    - search matches tenant id or organization name, case-insensitively
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor: Actor,
        status: Optional[TenantStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Result[Page[TenantView]]:
        denied = check_platform_admin(actor.role) or check_pagination(page, limit)
        if denied:
            return Return.err(denied)

        async with self.uow:
            tenants, total = await self.uow.tenants.list(
                status=status, search=search, page=page, limit=limit
            )
            items = []
            for tenant in tenants:
                organization = await self.uow.organizations.get_by_tenant_id(tenant.id)
                items.append(TenantView.from_entity(tenant, organization))

            return Return.ok(Page[TenantView].build(items, page, limit, total))
