"""
Check Email Invited Use Case

Tells a tenant administrator whether an email has a usable invitation.
"""

from libs.result import Result, Return
from src.app.services.authorization import check_tenant_admin
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import InvitationStatus, UserRole

from .dtos import CheckEmailInvitedResponse, InvitationView


class CheckEmailInvitedUseCase:
    """
    Business Rules:
    - Caller must be a tenant administrator
    - invited is true only while the invitation is effectively PENDING
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, tenant_id: str, user_role: UserRole, email: str
    ) -> Result[CheckEmailInvitedResponse]:
        async with self.uow:
            denied = await check_tenant_admin(self.uow, user_id, tenant_id, user_role)
            if denied:
                return Return.err(denied)

            invitation = await self.uow.invitations.get_by_tenant_and_email(
                tenant_id, normalize_email(email)
            )
            if invitation is None:
                return Return.ok(CheckEmailInvitedResponse(invited=False))

            view = InvitationView.from_entity(invitation)
            return Return.ok(
                CheckEmailInvitedResponse(
                    invited=view.effective_status == InvitationStatus.pending,
                    invitation=view,
                )
            )
