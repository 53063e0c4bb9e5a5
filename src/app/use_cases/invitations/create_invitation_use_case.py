"""
Create Invitation Use Case

Issues (or re-issues) an invitation for a person to join a tenant.
"""

import logging
import re
from datetime import timedelta

from libs.result import Result, Return
from src.app.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from src.app.services.authorization import check_tenant_admin
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utcnow
from src.domain.entities import (
    INVITATION_TTL,
    AuditEvent,
    Invitation,
    InvitationStatus,
    TenantStatus,
    UserRole,
)
from src.domain.tokens import generate_token

from .dtos import CreateInvitationCommand, InvitationView, IssuedInvitationResponse
from .notifications import build_invitation_url, send_invitation_email

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
ACTIVE_TENANT_STATUSES = (TenantStatus.approved, TenantStatus.reinstated)


class CreateInvitationUseCase:
    """
    Use case for inviting a person to a tenant.

    Business Rules:
    - Caller must be a tenant administrator
    - Tenant must exist and be APPROVED or REINSTATED
    - Email is normalized (trimmed, lower-case) before any comparison
    - Existing employees of the tenant cannot be invited
    - One row per (tenant, email): a pending, expired or revoked row is
      reused with a fresh token and expiry; an accepted row is immutable
    - Every issue mints a new token, invalidating the previous one
    - Expires after the invitation TTL (7 days by default)
    - Invitation email is best-effort
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
        self,
        user_id: str,
        tenant_id: str,
        user_role: UserRole,
        command: CreateInvitationCommand,
    ) -> Result[IssuedInvitationResponse]:
        """
        Execute create invitation use case.

        Args:
            user_id: Inviting user
            tenant_id: Tenant the invitation is for
            user_role: Inviter's platform role within that tenant, if known
            command: Invitee email, role and names

        Returns:
            Result with IssuedInvitationResponse (including the plaintext token), or Error
        """
        email = normalize_email(command.email)
        if not EMAIL_PATTERN.match(email):
            return Return.err(ValidationError("INVALID_EMAIL", "A valid email is required"))

        async with self.uow:
            denied = await check_tenant_admin(self.uow, user_id, tenant_id, user_role)
            if denied:
                return Return.err(denied)

            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(NotFoundError("TENANT_NOT_FOUND", "Tenant not found"))
            if tenant.status not in ACTIVE_TENANT_STATUSES:
                return Return.err(
                    ForbiddenError(
                        "TENANT_NOT_ACTIVE", "Tenant must be approved before inviting employees"
                    )
                )

            # 1. Reject existing members
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user is not None:
                employee = await self.uow.employees.get_by_tenant_and_user(
                    tenant_id, existing_user.id
                )
                if employee is not None:
                    return Return.err(
                        ConflictError("ALREADY_MEMBER", "User is already a member of this tenant")
                    )

            # 2. Reuse the (tenant, email) row unless it was accepted
            now = utcnow()
            invitation = await self.uow.invitations.get_by_tenant_and_email(tenant_id, email)
            if invitation is not None and invitation.effective_status(now) == InvitationStatus.accepted:
                return Return.err(self._already_accepted())

            # 3. Fresh token on every issue
            token, token_hash = generate_token()
            reissued = invitation is not None
            if invitation is None:
                invitation = await self.uow.invitations.create(
                    Invitation(
                        tenant_id=tenant_id,
                        email=email,
                        first_name=command.first_name,
                        last_name=command.last_name,
                        role=command.role,
                        status=InvitationStatus.pending,
                        token_hash=token_hash,
                        invited_by_user_id=user_id,
                        expires_at=now + self.invitation_ttl,
                    )
                )
            else:
                # Conditional on the row not having been accepted meanwhile
                invitation = await self.uow.invitations.reissue(
                    invitation.id,
                    token_hash=token_hash,
                    expires_at=now + self.invitation_ttl,
                    role=command.role,
                    first_name=command.first_name,
                    last_name=command.last_name,
                    invited_by_user_id=user_id,
                    at=now,
                )
                if invitation is None:
                    return Return.err(self._already_accepted())

            organization = await self.uow.organizations.get_by_tenant_id(tenant_id)
            inviter = await self.uow.users.get_by_id(user_id)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    action="invitation_created",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "email": email,
                        "role": invitation.role.value,
                        "reissued": reissued,
                    },
                )
            )

            await self.uow.commit()

        # 4. Notify (best-effort)
        invitation_url = build_invitation_url(self.invitation_base_url, token)
        email_sent = await send_invitation_email(
            self.email_sender, invitation, invitation_url, organization, inviter
        )

        logger.info(f"Invitation {invitation.id} issued for tenant {tenant_id}")
        return Return.ok(
            IssuedInvitationResponse(
                invitation=InvitationView.from_entity(invitation, now),
                token=token,
                invitation_url=invitation_url,
                email_sent=email_sent,
            )
        )

    @staticmethod
    def _already_accepted() -> ConflictError:
        return ConflictError("INVITATION_ALREADY_ACCEPTED", "Invitation has already been accepted")
