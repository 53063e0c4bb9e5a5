"""
Validate Invitation Token Use Case
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import InvitationStatus
from src.domain.tokens import hash_token

from .dtos import InvitationView, ValidateTokenResponse


class ValidateInvitationTokenUseCase:
    """
    Business Rules:
    - valid iff the invitation's effective status is PENDING
    - reason is NOT_FOUND (also for soft-deleted tenants) or the effective
      status otherwise
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[ValidateTokenResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(hash_token(token))
            if invitation is not None:
                tenant = await self.uow.tenants.get_by_id(invitation.tenant_id)
                if tenant is None:
                    invitation = None

        if invitation is None:
            return Return.ok(ValidateTokenResponse(valid=False, reason="NOT_FOUND"))

        view = InvitationView.from_entity(invitation)
        if view.effective_status != InvitationStatus.pending:
            return Return.ok(
                ValidateTokenResponse(
                    valid=False, reason=view.effective_status.value, invitation=view
                )
            )
        return Return.ok(ValidateTokenResponse(valid=True, invitation=view))
