"""
Authorization guard.

Tenant administrators manage their tenant's invitations and profile.
Platform administrators moderate tenants; that capability never follows
from tenant membership.
"""

from typing import Optional

from libs.result import Error
from src.app.errors import ForbiddenError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PLATFORM_ADMIN_ROLES, EmployeeRole, UserRole


async def check_tenant_admin(
    uow: UnitOfWork, user_id: str, tenant_id: str, user_role: Optional[UserRole] = None
) -> Optional[Error]:
    """
    Check that a user may act as administrator of a tenant.

    Must be called inside an open unit of work. ``user_role`` is only a
    shortcut when it is known to belong to ``tenant_id``.

    Returns:
        None if allowed, otherwise a ForbiddenError
    """
    if user_role == UserRole.tenant_admin:
        return None

    employee = await uow.employees.get_by_tenant_and_user(tenant_id, user_id)
    if employee is None:
        return ForbiddenError("TENANT_ACCESS_REQUIRED", "Tenant access required")
    if employee.role != EmployeeRole.admin:
        return ForbiddenError("ADMIN_ACCESS_REQUIRED", "Admin access required")
    return None


def check_platform_admin(user_role: Optional[UserRole]) -> Optional[Error]:
    if user_role in PLATFORM_ADMIN_ROLES:
        return None
    return ForbiddenError(
        "PLATFORM_ADMIN_REQUIRED", "Platform administrator access required"
    )
