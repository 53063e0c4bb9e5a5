"""
Organization Entity

Descriptive profile of a tenant.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Organization(SQLModel, table=True):
    """
    Organization entity - 1:1 profile owned by a tenant.

    Business Rules:
    - Created in the same transaction as its tenant
    - Removed with its tenant on hard delete
    """

    __tablename__ = "organizations"

    tenant_id: str = Field(
        foreign_key="tenants.id", primary_key=True, max_length=63, ondelete="CASCADE"
    )

    name: str = Field(max_length=255)
    legal_name: Optional[str] = Field(default=None, max_length=255)
    country: str = Field(default="ET", max_length=2)
    phone: Optional[str] = Field(default=None, max_length=50)
    website: Optional[str] = Field(default=None, max_length=255)
    logo_url: Optional[str] = Field(default=None, max_length=500)
    address: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
