"""
Tenant Lifecycle Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Platform-wide user role"""

    super_admin = "SUPER_ADMIN"
    admin = "ADMIN"
    tenant_admin = "TENANT_ADMIN"
    member = "MEMBER"


PLATFORM_ADMIN_ROLES = (UserRole.super_admin, UserRole.admin)


class TenantStatus(str, Enum):
    """Tenant approval status"""

    pending = "PENDING"
    approved = "APPROVED"
    rejected = "REJECTED"
    suspended = "SUSPENDED"
    reinstated = "REINSTATED"


class EmployeeRole(str, Enum):
    """Role of an employee within a tenant"""

    staff = "STAFF"
    manager = "MANAGER"
    admin = "ADMIN"


class EmployeeStatus(str, Enum):
    """Employee membership status"""

    invited = "INVITED"
    active = "ACTIVE"


class InvitationStatus(str, Enum):
    """
    Invitation status.

    EXPIRED is never written to storage; it is derived from expires_at.
    """

    pending = "PENDING"
    accepted = "ACCEPTED"
    expired = "EXPIRED"
    revoked = "REVOKED"
