"""
Resend Invitation Use Case

Rotates the token of an unaccepted invitation and sends it again.
"""

import logging
from datetime import timedelta
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import InvitationInvalidError, NotFoundError
from src.app.services.authorization import check_tenant_admin
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import INVITATION_TTL, AuditEvent, InvitationStatus, UserRole
from src.domain.tokens import generate_token

from .conflicts import lost_race
from .dtos import InvitationView, IssuedInvitationResponse
from .notifications import build_invitation_url, send_invitation_email

logger = logging.getLogger(__name__)

RESENDABLE = (InvitationStatus.pending, InvitationStatus.expired)


class ResendInvitationUseCase:
    """
    Use case for resending an invitation.

    Business Rules:
    - Caller must be a tenant administrator
    - Invitation must belong to the caller's tenant
    - Only PENDING or EXPIRED invitations can be resent;
      REVOKED and ACCEPTED fail
    - A new token and a fresh expiry replace the old ones, conditional on
      the row still being unaccepted and unrevoked
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        invitation_base_url: str,
        invitation_ttl: timedelta = INVITATION_TTL,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.invitation_base_url = invitation_base_url
        self.invitation_ttl = invitation_ttl

    async def execute(
        self, user_id: str, tenant_id: str, user_role: UserRole, invitation_id: UUID
    ) -> Result[IssuedInvitationResponse]:
        async with self.uow:
            denied = await check_tenant_admin(self.uow, user_id, tenant_id, user_role)
            if denied:
                return Return.err(denied)

            invitation = await self.uow.invitations.get_for_tenant(tenant_id, invitation_id)
            if invitation is None:
                return Return.err(NotFoundError("INVITATION_NOT_FOUND", "Invitation not found"))

            now = utcnow()
            current = invitation.effective_status(now)
            if current not in RESENDABLE:
                return Return.err(InvitationInvalidError(current))

            token, token_hash = generate_token()
            rotated = await self.uow.invitations.rotate_token(
                tenant_id, invitation_id, token_hash, now + self.invitation_ttl, now
            )
            if rotated is None:
                return await lost_race(self.uow, invitation_id, now)
            invitation = rotated

            organization = await self.uow.organizations.get_by_tenant_id(tenant_id)
            inviter = await self.uow.users.get_by_id(user_id)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    action="invitation_resent",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "previous_status": current.value,
                    },
                )
            )

            await self.uow.commit()

        invitation_url = build_invitation_url(self.invitation_base_url, token)
        email_sent = await send_invitation_email(
            self.email_sender, invitation, invitation_url, organization, inviter
        )

        return Return.ok(
            IssuedInvitationResponse(
                invitation=InvitationView.from_entity(invitation, now),
                token=token,
                invitation_url=invitation_url,
                email_sent=email_sent,
            )
        )
