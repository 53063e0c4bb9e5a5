"""
Update Invitation Role Use Case
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.errors import InvitationInvalidError, NotFoundError
from src.app.services.authorization import check_tenant_admin
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, EmployeeRole, InvitationStatus, UserRole

from .conflicts import lost_race
from .dtos import InvitationView


class UpdateInvitationRoleUseCase:
    """
    Business Rules:
    - Caller must be a tenant administrator
    - Only stored-PENDING invitations can change role, checked again by the
      conditional write so a concurrent accept wins
    - Token and expiry are untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        tenant_id: str,
        user_role: UserRole,
        invitation_id: UUID,
        role: EmployeeRole,
    ) -> Result[InvitationView]:
        async with self.uow:
            denied = await check_tenant_admin(self.uow, user_id, tenant_id, user_role)
            if denied:
                return Return.err(denied)

            invitation = await self.uow.invitations.get_for_tenant(tenant_id, invitation_id)
            if invitation is None:
                return Return.err(NotFoundError("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.status != InvitationStatus.pending:
                return Return.err(InvitationInvalidError(invitation.status))

            previous_role = invitation.role
            now = utcnow()
            updated = await self.uow.invitations.update_role(tenant_id, invitation_id, role, now)
            if updated is None:
                return await lost_race(self.uow, invitation_id, now)
            invitation = updated

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    action="invitation_role_updated",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "from": previous_role.value,
                        "to": role.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(InvitationView.from_entity(invitation))
