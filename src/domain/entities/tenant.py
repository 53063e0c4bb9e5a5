"""
Tenant Entity

An organization registered on the platform and its approval state machine.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple
from uuid import UUID, uuid4

from pydantic import BaseModel
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import TenantStatus

# Target status -> statuses it may be reached from
TRANSITIONS: Dict[TenantStatus, Tuple[TenantStatus, ...]] = {
    TenantStatus.approved: (TenantStatus.pending,),
    TenantStatus.rejected: (TenantStatus.pending,),
    TenantStatus.suspended: (TenantStatus.approved, TenantStatus.reinstated),
    TenantStatus.reinstated: (TenantStatus.suspended,),
}


def can_transition(current: TenantStatus, target: TenantStatus) -> bool:
    return current in TRANSITIONS.get(target, ())


class ModerationEntry(BaseModel):
    """One moderation log record; never mutated once written."""

    action: TenantStatus
    by: str
    reason: Optional[str] = None
    at: datetime


class Tenant(SQLModel, table=True):
    """
    Tenant entity - an organization moving through admin approval.

    Business Rules:
    - id is a caller-chosen slug, globally unique and immutable
    - Created in PENDING; only approved or rejected from PENDING
    - Every status change appends to moderation_log (never rewrites it)
    - revision increases on every status change (optimistic locking)
    - Soft delete hides the tenant from lookups; hard delete purges it
    """

    __tablename__ = "tenants"

    id: str = Field(primary_key=True, max_length=63)
    uuid: UUID = Field(default_factory=uuid4, unique=True)

    status: TenantStatus = Field(default=TenantStatus.pending)

    # Weak references to users
    owner_id: Optional[str] = Field(default=None, max_length=64)
    created_by: Optional[str] = Field(default=None, max_length=64)

    moderation_log: List[dict] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    tenant_metadata: Optional[dict] = Field(
        default=None, sa_column=Column("metadata", JSON)
    )
    revision: int = Field(default=0)

    # Soft delete support
    deleted: bool = Field(default=False)
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_tenant_status", "status"),
        Index("idx_tenant_deleted", "deleted"),
        Index("idx_tenant_owner_id", "owner_id"),
    )

    def moderation_entries(self) -> List[ModerationEntry]:
        return [ModerationEntry.model_validate(item) for item in self.moderation_log or []]

    def log_with(self, entry: ModerationEntry) -> List[dict]:
        """Return a new log list with ``entry`` appended; the current list is left untouched."""
        return [*(self.moderation_log or []), entry.model_dump(mode="json")]
