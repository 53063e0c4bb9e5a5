from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, or_, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.store_errors import translate_store_errors
from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.base import normalize_email, utcnow
from src.domain.entities import (
    EmployeeRole,
    Invitation,
    InvitationStatus,
    effective_status_clause,
)


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID, reloading any copy already in the session"""
        stmt = (
            select(Invitation)
            .where(Invitation.id == invitation_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_tenant(self, tenant_id: str, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID within a tenant"""
        stmt = select(Invitation).where(
            Invitation.id == invitation_id, Invitation.tenant_id == tenant_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Optional[Invitation]:
        """Get invitation by token hash"""
        stmt = select(Invitation).where(Invitation.token_hash == token_hash)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_tenant_and_email(self, tenant_id: str, email: str) -> Optional[Invitation]:
        """Get invitation row for (tenant, email)"""
        stmt = select(Invitation).where(
            Invitation.tenant_id == tenant_id,
            Invitation.email == normalize_email(email),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        tenant_id: str,
        status: Optional[InvitationStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Invitation], int]:
        """List a tenant's invitations, newest first"""
        stmt = select(Invitation).where(Invitation.tenant_id == tenant_id)
        if status is not None:
            stmt = stmt.where(effective_status_clause(status, utcnow()))
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Invitation.email).like(pattern),
                    func.lower(Invitation.first_name).like(pattern),
                    func.lower(Invitation.last_name).like(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            stmt.order_by(Invitation.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        with translate_store_errors("An invitation for this email already exists"):
            self.session.add(invitation)
            await self.session.flush()
            await self.session.refresh(invitation)
        return invitation


    async def _update_where(
        self, invitation_id: UUID, *conditions, **values
    ) -> Optional[Invitation]:
        """
        UPDATE ... WHERE id = :id AND <conditions>

        The row lock taken by the update serializes concurrent writers;
        a writer whose conditions no longer hold sees no affected row
        and gets None.
        """
        stmt = (
            update(Invitation)
            .where(Invitation.id == invitation_id, *conditions)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with translate_store_errors():
            result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.get_by_id(invitation_id)

    async def reissue(
        self,
        invitation_id: UUID,
        token_hash: str,
        expires_at: datetime,
        role: EmployeeRole,
        first_name: Optional[str],
        last_name: Optional[str],
        invited_by_user_id: str,
        at: datetime,
    ) -> Optional[Invitation]:
        return await self._update_where(
            invitation_id,
            Invitation.status != InvitationStatus.accepted,
            status=InvitationStatus.pending,
            token_hash=token_hash,
            expires_at=expires_at,
            role=role,
            first_name=first_name,
            last_name=last_name,
            invited_by_user_id=invited_by_user_id,
            accepted_at=None,
            updated_at=at,
        )

    async def revoke(
        self, tenant_id: str, invitation_id: UUID, at: datetime
    ) -> Optional[Invitation]:
        return await self._update_where(
            invitation_id,
            Invitation.tenant_id == tenant_id,
            Invitation.status == InvitationStatus.pending,
            status=InvitationStatus.revoked,
            updated_at=at,
        )

    async def rotate_token(
        self,
        tenant_id: str,
        invitation_id: UUID,
        token_hash: str,
        expires_at: datetime,
        at: datetime,
    ) -> Optional[Invitation]:
        # Stored PENDING covers both pending and expired
        return await self._update_where(
            invitation_id,
            Invitation.tenant_id == tenant_id,
            Invitation.status == InvitationStatus.pending,
            token_hash=token_hash,
            expires_at=expires_at,
            updated_at=at,
        )

    async def update_role(
        self, tenant_id: str, invitation_id: UUID, role: EmployeeRole, at: datetime
    ) -> Optional[Invitation]:
        return await self._update_where(
            invitation_id,
            Invitation.tenant_id == tenant_id,
            Invitation.status == InvitationStatus.pending,
            role=role,
            updated_at=at,
        )

    async def mark_accepted(
        self, invitation_id: UUID, token_hash: str, accepted_at: datetime
    ) -> Optional[Invitation]:
        """Only one of several concurrent accepts sees an affected row."""
        return await self._update_where(
            invitation_id,
            Invitation.status == InvitationStatus.pending,
            Invitation.expires_at > accepted_at,
            Invitation.token_hash == token_hash,
            status=InvitationStatus.accepted,
            accepted_at=accepted_at,
            updated_at=accepted_at,
        )

    async def delete_by_tenant_id(self, tenant_id: str) -> int:
        """Delete every invitation of a tenant"""
        with translate_store_errors():
            result = await self.session.execute(
                delete(Invitation).where(Invitation.tenant_id == tenant_id)
            )
        return result.rowcount
