from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import EmployeeRole, Invitation, InvitationStatus


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_for_tenant(self, tenant_id: str, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID, only if it belongs to the tenant"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[Invitation]:
        """Get invitation by token hash"""
        pass

    @abstractmethod
    async def get_by_tenant_and_email(self, tenant_id: str, email: str) -> Optional[Invitation]:
        """Get the invitation row for a (tenant, normalized email) pair"""
        pass

    @abstractmethod
    async def list(
        self,
        tenant_id: str,
        status: Optional[InvitationStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Invitation], int]:
        """
        List a tenant's invitations filtered by effective status.

        Returns (page items, total count).
        """
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
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
        """
        Reset a non-accepted row to PENDING with a new token.

        Returns the updated row, or None if it was accepted meanwhile.
        """
        pass

    @abstractmethod
    async def revoke(
        self, tenant_id: str, invitation_id: UUID, at: datetime
    ) -> Optional[Invitation]:
        """Flip a stored-PENDING invitation to REVOKED; None if it is no longer pending"""
        pass

    @abstractmethod
    async def rotate_token(
        self,
        tenant_id: str,
        invitation_id: UUID,
        token_hash: str,
        expires_at: datetime,
        at: datetime,
    ) -> Optional[Invitation]:
        """Replace token and expiry of a stored-PENDING invitation; None if it is no longer pending"""
        pass

    @abstractmethod
    async def update_role(
        self, tenant_id: str, invitation_id: UUID, role: EmployeeRole, at: datetime
    ) -> Optional[Invitation]:
        """Change the role of a stored-PENDING invitation; None if it is no longer pending"""
        pass

    @abstractmethod
    async def mark_accepted(
        self, invitation_id: UUID, token_hash: str, accepted_at: datetime
    ) -> Optional[Invitation]:
        """
        Flip a pending, unexpired invitation to ACCEPTED.

        The token hash must still be the current one. Returns the updated
        row, or None if it was no longer acceptable.
        """
        pass

    @abstractmethod
    async def delete_by_tenant_id(self, tenant_id: str) -> int:
        """Delete every invitation of a tenant"""
        pass
