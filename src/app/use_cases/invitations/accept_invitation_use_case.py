"""
Accept Invitation Use Case

Turns a valid invitation token into an active tenant membership.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import (
    ForbiddenError,
    InvitationInvalidError,
    NotFoundError,
    ValidationError,
)
from src.app.services.auth_provider import AuthIdentity, IAuthProvider, discard_identity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import EmployeeView
from src.app.use_cases.users.dtos import UserView
from src.domain.base import normalize_email, utcnow
from src.domain.entities import (
    AuditEvent,
    Employee,
    EmployeeStatus,
    InvitationStatus,
    user_role_for,
)
from src.domain.tokens import hash_token

from .conflicts import lost_race
from .dtos import AcceptInvitationResponse, InvitationView, SignupInput

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting an invitation.

    Business Rules:
    - Token must resolve to an invitation of an existing (not soft-deleted)
      tenant whose effective status is PENDING;
      otherwise INVITATION_EXPIRED / INVITATION_REVOKED / INVITATION_ACCEPTED
    - Accepting identity, in priority order: current session, an existing
      user id, or a signup forwarded to the auth provider
    - Identity email must equal the invitation email (FORBIDDEN otherwise)
    - In one transaction: invitation -> ACCEPTED, employee row inserted
      (no-op if it already exists), user bound to the tenant with
      ADMIN -> TENANT_ADMIN and any other role -> MEMBER
    - Of concurrent accepts on one token exactly one succeeds; the others
      get INVITATION_ACCEPTED
    - An identity signed up here is deleted again if the transaction fails
    """

    def __init__(self, uow: UnitOfWork, auth_provider: IAuthProvider):
        self.uow = uow
        self.auth_provider = auth_provider

    async def execute(
        self,
        token: str,
        session_identity: Optional[AuthIdentity] = None,
        existing_user_id: Optional[str] = None,
        signup: Optional[SignupInput] = None,
    ) -> Result[AcceptInvitationResponse]:
        """
        Execute accept invitation use case.

        Args:
            token: Plaintext invitation token
            session_identity: Identity of the signed-in caller, if any
            existing_user_id: Account to accept with when not signed in
            signup: New-account details when neither of the above is given

        Returns:
            Result with AcceptInvitationResponse DTO, or Error

        Raises:
            OperationError: store or auth provider failure
        """
        # 1. Resolve invitation by token
        existing_user = None
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(hash_token(token))
            if invitation is None:
                return Return.err(NotFoundError("INVITATION_NOT_FOUND", "Invitation not found"))

            current = invitation.effective_status()
            if current != InvitationStatus.pending:
                return Return.err(InvitationInvalidError(current))

            if await self.uow.tenants.get_by_id(invitation.tenant_id) is None:
                return Return.err(self._tenant_not_found())

            if session_identity is None and existing_user_id:
                existing_user = await self.uow.users.get_by_id(existing_user_id)
                if existing_user is None:
                    return Return.err(NotFoundError("USER_NOT_FOUND", "User not found"))

        # 2. Resolve the accepting identity
        created_user_id = None
        if session_identity is not None:
            identity = session_identity
        elif existing_user is not None:
            identity = AuthIdentity(
                user_id=existing_user.id, email=existing_user.email, name=existing_user.name
            )
        elif signup is not None:
            if normalize_email(signup.email) != invitation.email:
                return Return.err(self._email_mismatch())
            identity = await self.auth_provider.sign_up_with_password(
                signup.email, signup.password, signup.name
            )
            created_user_id = identity.user_id
        else:
            return Return.err(
                ValidationError(
                    "IDENTITY_REQUIRED", "Sign in or provide account details to accept"
                )
            )

        # 3. Token holder must own the invited email
        if normalize_email(identity.email) != invitation.email:
            return Return.err(self._email_mismatch())

        # 4. Atomic acceptance
        try:
            result = await self._accept(invitation.id, invitation.token_hash, identity.user_id)
        except Exception:
            if created_user_id:
                await discard_identity(self.auth_provider, created_user_id)
            raise

        if result.is_err() and created_user_id:
            await discard_identity(self.auth_provider, created_user_id)
        return result

    async def _accept(
        self, invitation_id: UUID, token_hash: str, user_id: str
    ) -> Result[AcceptInvitationResponse]:
        async with self.uow:
            now = utcnow()

            # 1. Conditional PENDING -> ACCEPTED; losers of a race stop here
            invitation = await self.uow.invitations.mark_accepted(invitation_id, token_hash, now)
            if invitation is None:
                return await lost_race(self.uow, invitation_id, now)

            # Tenant may have been soft-deleted since the token was resolved
            if await self.uow.tenants.get_by_id(invitation.tenant_id) is None:
                return Return.err(self._tenant_not_found())

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(NotFoundError("USER_NOT_FOUND", "User not found"))

            # 2. Membership (idempotent)
            employee = await self.uow.employees.add_if_absent(
                Employee(
                    tenant_id=invitation.tenant_id,
                    user_id=user.id,
                    role=invitation.role,
                    status=EmployeeStatus.active,
                    joined_at=now,
                )
            )

            # 3. Bind the user to the tenant
            user.tenant_id = invitation.tenant_id
            if not user.is_platform_admin:
                user.role = user_role_for(invitation.role)
            user = await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=invitation.tenant_id,
                    user_id=user.id,
                    action="invitation_accepted",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "role": invitation.role.value,
                    },
                )
            )

            await self.uow.commit()

        logger.info(f"Invitation {invitation.id} accepted by user {user.id}")
        return Return.ok(
            AcceptInvitationResponse(
                invitation=InvitationView.from_entity(invitation, now),
                employee=EmployeeView.from_entity(employee),
                user=UserView.model_validate(user),
            )
        )

    @staticmethod
    def _tenant_not_found() -> NotFoundError:
        return NotFoundError("TENANT_NOT_FOUND", "Tenant not found")

    @staticmethod
    def _email_mismatch() -> ForbiddenError:
        return ForbiddenError("EMAIL_MISMATCH", "Invitation was sent to a different email")
