"""
Tenant Use Cases

Registration and tenant self-service.
"""

from .dtos import (
    EmployeeView,
    OrganizationInput,
    OrganizationView,
    OwnerInput,
    RegisterTenantCommand,
    RegisterTenantResponse,
    TenantView,
    UpdateOrganizationCommand,
)
from .get_tenant_use_case import GetTenantUseCase
from .register_tenant_use_case import RegisterTenantUseCase
from .update_organization_use_case import UpdateOrganizationUseCase

__all__ = [
    "RegisterTenantUseCase",
    "GetTenantUseCase",
    "UpdateOrganizationUseCase",
    "RegisterTenantCommand",
    "RegisterTenantResponse",
    "OrganizationInput",
    "OwnerInput",
    "UpdateOrganizationCommand",
    "TenantView",
    "OrganizationView",
    "EmployeeView",
]
