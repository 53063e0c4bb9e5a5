"""
Employee Entity

Links a User to a Tenant with an employee role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import EmployeeRole, EmployeeStatus, UserRole


def user_role_for(role: EmployeeRole) -> UserRole:
    """Platform role a user receives when joining a tenant with ``role``."""
    if role == EmployeeRole.admin:
        return UserRole.tenant_admin
    return UserRole.member


class Employee(SQLModel, table=True):
    """
    Employee entity - membership of a user in a tenant.

    Business Rules:
    - (tenant_id, user_id) must be unique
    - Created for the bootstrap owner or on invitation acceptance
    - ADMIN employees may manage the tenant's invitations
    """

    __tablename__ = "employees"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: str = Field(
        foreign_key="tenants.id", nullable=False, max_length=63, ondelete="CASCADE"
    )
    user_id: str = Field(foreign_key="users.id", nullable=False, max_length=64)

    role: EmployeeRole = Field(default=EmployeeRole.staff)
    status: EmployeeStatus = Field(default=EmployeeStatus.active)

    # Timestamps
    joined_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_employee_tenant_user", "tenant_id", "user_id", unique=True),
        Index("idx_employee_user_id", "user_id"),
    )
