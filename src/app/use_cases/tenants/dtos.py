"""
Tenant Use Case DTOs (Data Transfer Objects)

All Command and Response classes for tenant domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from src.domain.entities import (
    Employee,
    EmployeeRole,
    EmployeeStatus,
    ModerationEntry,
    Organization,
    Tenant,
    TenantStatus,
)


# ============================================================================
# Command DTOs
# ============================================================================


class OrganizationInput(BaseModel):
    """Organization profile supplied at registration"""

    name: str
    legal_name: Optional[str] = None
    country: str = "ET"
    phone: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    address: Optional[Dict[str, Any]] = None


class OwnerInput(BaseModel):
    """Tenant owner; password is needed only when no account exists yet"""

    email: str
    name: Optional[str] = None
    password: Optional[str] = None


class RegisterTenantCommand(BaseModel):
    """Command for registering a tenant"""

    tenant_id: str
    organization: OrganizationInput
    owner: Optional[OwnerInput] = None
    metadata: Optional[Dict[str, Any]] = None
    created_by: Optional[str] = None


class UpdateOrganizationCommand(BaseModel):
    """Partial organization update; unset fields are left alone"""

    name: Optional[str] = None
    legal_name: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    address: Optional[Dict[str, Any]] = None


# ============================================================================
# Response DTOs
# ============================================================================


class OrganizationView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tenant_id: str
    name: str
    legal_name: Optional[str] = None
    country: str
    phone: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    address: Optional[Dict[str, Any]] = None


class EmployeeView(BaseModel):
    id: str
    tenant_id: str
    user_id: str
    role: EmployeeRole
    status: EmployeeStatus
    joined_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, employee: Employee) -> "EmployeeView":
        return cls(
            id=str(employee.id),
            tenant_id=employee.tenant_id,
            user_id=employee.user_id,
            role=employee.role,
            status=employee.status,
            joined_at=employee.joined_at,
        )


class TenantView(BaseModel):
    """Tenant with its organization profile and moderation history"""

    id: str
    uuid: str
    status: TenantStatus
    owner_id: Optional[str] = None
    created_by: Optional[str] = None
    moderation_log: List[ModerationEntry]
    metadata: Optional[Dict[str, Any]] = None
    deleted: bool
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    organization: Optional[OrganizationView] = None

    @classmethod
    def from_entity(
        cls, tenant: Tenant, organization: Optional[Organization] = None
    ) -> "TenantView":
        return cls(
            id=tenant.id,
            uuid=str(tenant.uuid),
            status=tenant.status,
            owner_id=tenant.owner_id,
            created_by=tenant.created_by,
            moderation_log=tenant.moderation_entries(),
            metadata=tenant.tenant_metadata,
            deleted=tenant.deleted,
            deleted_at=tenant.deleted_at,
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
            organization=(
                OrganizationView.model_validate(organization) if organization else None
            ),
        )


class RegisterTenantResponse(BaseModel):
    """Response for register tenant use case"""

    tenant: TenantView
    owner: Optional[EmployeeView] = None
