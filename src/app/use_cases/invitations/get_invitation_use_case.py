"""
Get Invitation Use Case
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.errors import NotFoundError
from src.app.services.authorization import check_tenant_admin
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole

from .dtos import InvitationView


class GetInvitationUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, tenant_id: str, user_role: UserRole, invitation_id: UUID
    ) -> Result[InvitationView]:
        async with self.uow:
            denied = await check_tenant_admin(self.uow, user_id, tenant_id, user_role)
            if denied:
                return Return.err(denied)

            invitation = await self.uow.invitations.get_for_tenant(tenant_id, invitation_id)
            if invitation is None:
                return Return.err(NotFoundError("INVITATION_NOT_FOUND", "Invitation not found"))

            return Return.ok(InvitationView.from_entity(invitation))
