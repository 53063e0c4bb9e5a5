"""Admin use cases for platform moderation and tenant purge."""

from .approve_tenant_use_case import ApproveTenantUseCase
from .bootstrap_platform_admin_use_case import BootstrapPlatformAdminUseCase
from .dtos import HardDeleteTenantResponse
from .hard_delete_tenant_use_case import HardDeleteTenantUseCase
from .list_tenants_use_case import ListTenantsUseCase
from .recover_tenant_use_case import RecoverTenantUseCase
from .reinstate_tenant_use_case import ReinstateTenantUseCase
from .reject_tenant_use_case import RejectTenantUseCase
from .soft_delete_tenant_use_case import SoftDeleteTenantUseCase
from .suspend_tenant_use_case import SuspendTenantUseCase

__all__ = [
    "ApproveTenantUseCase",
    "RejectTenantUseCase",
    "SuspendTenantUseCase",
    "ReinstateTenantUseCase",
    "ListTenantsUseCase",
    "SoftDeleteTenantUseCase",
    "RecoverTenantUseCase",
    "HardDeleteTenantUseCase",
    "HardDeleteTenantResponse",
    "BootstrapPlatformAdminUseCase",
]
