"""
Revoke Invitation Use Case
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.errors import InvitationInvalidError, NotFoundError
from src.app.services.authorization import check_tenant_admin
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, InvitationStatus, UserRole

from .dtos import InvitationView
from .conflicts import lost_race


class RevokeInvitationUseCase:
    """
    Use case for revoking an invitation.

    Business Rules:
    - Caller must be a tenant administrator
    - Invitation must belong to the caller's tenant
    - Only stored-PENDING invitations (expired ones included) can be revoked
    - The status write is conditional on the row still being PENDING; an
      accept that commits first wins and revoke reports INVITATION_ACCEPTED
    - The last issued token stops working immediately
    """

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

            if invitation.status != InvitationStatus.pending:
                return Return.err(InvitationInvalidError(invitation.status))

            now = utcnow()
            revoked = await self.uow.invitations.revoke(tenant_id, invitation_id, now)
            if revoked is None:
                return await lost_race(self.uow, invitation_id, now)
            invitation = revoked

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    action="invitation_revoked",
                    event_metadata={"invitation_id": str(invitation.id)},
                )
            )

            await self.uow.commit()

            return Return.ok(InvitationView.from_entity(invitation))
