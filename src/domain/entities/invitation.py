"""
Invitation Entity

Invitations for a person to join a tenant as an employee.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import as_naive_utc, utcnow

from .enums import EmployeeRole, InvitationStatus

INVITATION_TTL = timedelta(days=7)


def effective_status(
    status: InvitationStatus, expires_at: datetime, now: Optional[datetime] = None
) -> InvitationStatus:
    """
    Status as callers see it.

    A stored PENDING row whose expiry has passed reads as EXPIRED.
    """
    if status != InvitationStatus.pending:
        return status
    now = as_naive_utc(now) if now is not None else utcnow()
    if as_naive_utc(expires_at) <= now:
        return InvitationStatus.expired
    return InvitationStatus.pending


class Invitation(SQLModel, table=True):
    """
    Invitation entity - one row per (tenant, email).

    Business Rules:
    - Email stored normalized; at most one row per (tenant_id, email)
    - Only the SHA-256 hash of the bearer token is stored
    - Re-inviting reuses the row with a new token and expiry
    - Expires 7 days after issue; EXPIRED is derived, never stored
    - Accepted invitations are immutable
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: str = Field(
        foreign_key="tenants.id", nullable=False, max_length=63, ondelete="CASCADE"
    )
    email: str = Field(max_length=255, nullable=False)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    role: EmployeeRole = Field(default=EmployeeRole.staff)
    status: InvitationStatus = Field(default=InvitationStatus.pending)
    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hash

    invited_by_user_id: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_tenant_email", "tenant_id", "email", unique=True),
        Index("idx_invitation_status", "status"),
        Index("idx_invitation_expires_at", "expires_at"),
    )

    def effective_status(self, now: Optional[datetime] = None) -> InvitationStatus:
        return effective_status(self.status, self.expires_at, now)


def effective_status_clause(status: InvitationStatus, now: datetime):
    """SQL filter matching rows whose effective status is ``status``."""
    if status == InvitationStatus.expired:
        return and_(
            Invitation.status == InvitationStatus.pending, Invitation.expires_at <= now
        )
    if status == InvitationStatus.pending:
        return and_(
            Invitation.status == InvitationStatus.pending, Invitation.expires_at > now
        )
    return Invitation.status == status
