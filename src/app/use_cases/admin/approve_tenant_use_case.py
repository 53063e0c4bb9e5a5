"""
Approve Tenant Use Case

Platform administrator approves a pending tenant.
"""

from typing import Optional

from libs.result import Result, Return
from src.app.services.authorization import check_platform_admin
from src.app.services.email_sender import EmailTemplate, IEmailSender, send_best_effort
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import TenantView
from src.app.use_cases.users.dtos import Actor
from src.domain.entities import TenantStatus

from .moderation import transition_tenant


class ApproveTenantUseCase:
    """
    Use case for approving a tenant.

    Business Rules:
    - Caller must be a platform administrator
    - Only PENDING tenants can be approved; approving twice fails
    - Appends {action: APPROVED, by, reason, at} to the moderation log
    - Owner is notified best-effort after commit
    """

    def __init__(self, uow: UnitOfWork, email_sender: IEmailSender, login_url: str):
        self.uow = uow
        self.email_sender = email_sender
        self.login_url = login_url

    async def execute(
        self, actor: Actor, tenant_id: str, reason: Optional[str] = None
    ) -> Result[TenantView]:
        """
        Execute approve tenant use case.

        Args:
            actor: Authenticated caller
            tenant_id: Tenant to approve
            reason: Optional note stored in the moderation log

        Returns:
            Result with the updated TenantView, or Error
        """
        denied = check_platform_admin(actor.role)
        if denied:
            return Return.err(denied)

        async with self.uow:
            result = await transition_tenant(
                self.uow, tenant_id, TenantStatus.approved, actor.user_id, reason
            )
            if result.is_err():
                return result
            tenant = result.value

            organization = await self.uow.organizations.get_by_tenant_id(tenant_id)
            owner = await self.uow.users.get_by_id(tenant.owner_id) if tenant.owner_id else None

            await self.uow.commit()

        if owner is not None:
            await send_best_effort(
                self.email_sender,
                owner.email,
                EmailTemplate.tenant_approved,
                {
                    "organization_name": organization.name if organization else tenant.id,
                    "owner_name": owner.name or owner.email,
                    "login_url": self.login_url,
                },
            )

        return Return.ok(TenantView.from_entity(tenant, organization))
