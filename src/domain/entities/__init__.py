"""
Tenant Lifecycle Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    PLATFORM_ADMIN_ROLES,
    EmployeeRole,
    EmployeeStatus,
    InvitationStatus,
    TenantStatus,
    UserRole,
)

# Export all entities
from .user import User
from .credential import Credential
from .tenant import ModerationEntry, Tenant, can_transition
from .organization import Organization
from .employee import Employee, user_role_for
from .invitation import (
    INVITATION_TTL,
    Invitation,
    effective_status,
    effective_status_clause,
)
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "PLATFORM_ADMIN_ROLES",
    "UserRole",
    "TenantStatus",
    "EmployeeRole",
    "EmployeeStatus",
    "InvitationStatus",
    # Entities
    "User",
    "Credential",
    "Tenant",
    "ModerationEntry",
    "can_transition",
    "Organization",
    "Employee",
    "user_role_for",
    "Invitation",
    "INVITATION_TTL",
    "effective_status",
    "effective_status_clause",
    "AuditEvent",
]
