"""
AuditEvent Entity

Immutable log of tenant and invitation lifecycle events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of lifecycle events.

    Business Rules:
    - Immutable (never updated or deleted, survives tenant purge)
    - tenant_id and user_id are plain values, not foreign keys
    - Metadata never contains plaintext tokens
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: Optional[str] = Field(default=None, max_length=63)
    user_id: Optional[str] = Field(default=None, max_length=64)

    action: str = Field(max_length=100)  # e.g., "invitation_created"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_tenant_action", "tenant_id", "action"),
        Index("idx_audit_user_id", "user_id"),
    )
