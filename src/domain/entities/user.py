"""
User Entity

A person known to the auth provider, optionally bound to one tenant.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import generate_uuid, utcnow

from .enums import PLATFORM_ADMIN_ROLES, UserRole


class User(SQLModel, table=True):
    """
    User entity - a person who may administer the platform or work for a tenant.

    Business Rules:
    - Email is unique and stored normalized (trimmed, lower-case)
    - tenant_id is the single active tenant binding (set on invitation acceptance)
    - SUPER_ADMIN and ADMIN are platform administrators
    - TENANT_ADMIN is derived from an ADMIN employee role
    """

    __tablename__ = "users"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=64)
    email: str = Field(unique=True, index=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)

    role: UserRole = Field(default=UserRole.member)
    tenant_id: Optional[str] = Field(
        default=None, foreign_key="tenants.id", ondelete="SET NULL"
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_tenant_id", "tenant_id"),)

    @property
    def is_platform_admin(self) -> bool:
        return self.role in PLATFORM_ADMIN_ROLES
