"""
Reject Tenant Use Case
"""

from libs.result import Result, Return
from src.app.errors import ValidationError
from src.app.services.authorization import check_platform_admin
from src.app.services.email_sender import EmailTemplate, IEmailSender, send_best_effort
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import TenantView
from src.app.use_cases.users.dtos import Actor
from src.domain.entities import TenantStatus

from .moderation import transition_tenant


class RejectTenantUseCase:
    """
    Use case for rejecting a tenant.

    Business Rules:
    - Caller must be a platform administrator
    - A non-blank reason is mandatory
    - Only PENDING tenants can be rejected
    - Owner receives the reason best-effort after commit
    """

    def __init__(self, uow: UnitOfWork, email_sender: IEmailSender, support_email: str):
        self.uow = uow
        self.email_sender = email_sender
        self.support_email = support_email

    async def execute(self, actor: Actor, tenant_id: str, reason: str) -> Result[TenantView]:
        denied = check_platform_admin(actor.role)
        if denied:
            return Return.err(denied)

        reason = (reason or "").strip()
        if not reason:
            return Return.err(
                ValidationError("REJECTION_REASON_REQUIRED", "A rejection reason is required")
            )

        async with self.uow:
            result = await transition_tenant(
                self.uow, tenant_id, TenantStatus.rejected, actor.user_id, reason
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
                EmailTemplate.tenant_rejected,
                {
                    "organization_name": organization.name if organization else tenant.id,
                    "owner_name": owner.name or owner.email,
                    "reason": reason,
                    "support_email": self.support_email,
                },
            )

        return Return.ok(TenantView.from_entity(tenant, organization))
