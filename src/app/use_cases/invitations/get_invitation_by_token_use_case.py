"""
Get Invitation By Token Use Case

Public lookup used by the accept page.
"""

from libs.result import Result, Return
from src.app.errors import NotFoundError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.tokens import hash_token

from .dtos import InvitationDetailsResponse, InvitationView


class GetInvitationByTokenUseCase:
    """
    Business Rules:
    - Lookup is by SHA-256 of the token, never by plaintext
    - Unknown tokens are NOT_FOUND with no further detail
    - Invitations of soft-deleted tenants are TENANT_NOT_FOUND
    - Returned regardless of status; effective_status tells the caller
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[InvitationDetailsResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(hash_token(token))
            if invitation is None:
                return Return.err(NotFoundError("INVITATION_NOT_FOUND", "Invitation not found"))

            if await self.uow.tenants.get_by_id(invitation.tenant_id) is None:
                return Return.err(NotFoundError("TENANT_NOT_FOUND", "Tenant not found"))

            organization = await self.uow.organizations.get_by_tenant_id(invitation.tenant_id)
            return Return.ok(
                InvitationDetailsResponse(
                    invitation=InvitationView.from_entity(invitation),
                    organization_name=organization.name if organization else None,
                )
            )
