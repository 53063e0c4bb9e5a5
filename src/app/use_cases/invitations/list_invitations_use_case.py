"""
List Invitations Use Case
"""

from typing import Optional

from libs.result import Result, Return
from src.app.services.authorization import check_tenant_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import Page, check_pagination
from src.domain.base import utcnow
from src.domain.entities import InvitationStatus, UserRole

from .dtos import InvitationView


class ListInvitationsUseCase:
    """
    Business Rules:
    - Caller must be a tenant administrator
    - status filters on the effective status (EXPIRED included)
    - search matches email, first or last name
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        tenant_id: str,
        user_role: UserRole,
        status: Optional[InvitationStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Result[Page[InvitationView]]:
        invalid = check_pagination(page, limit)
        if invalid:
            return Return.err(invalid)

        async with self.uow:
            denied = await check_tenant_admin(self.uow, user_id, tenant_id, user_role)
            if denied:
                return Return.err(denied)

            invitations, total = await self.uow.invitations.list(
                tenant_id, status=status, search=search, page=page, limit=limit
            )

            now = utcnow()
            items = [InvitationView.from_entity(invitation, now) for invitation in invitations]
            return Return.ok(Page[InvitationView].build(items, page, limit, total))
