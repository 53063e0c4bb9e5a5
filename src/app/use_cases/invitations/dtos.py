"""
Invitation Use Case DTOs (Data Transfer Objects)

Invitation views never carry the token hash; plaintext tokens appear only
in IssuedInvitationResponse, once.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.tenants.dtos import EmployeeView
from src.app.use_cases.users.dtos import UserView
from src.domain.entities import EmployeeRole, Invitation, InvitationStatus


# ============================================================================
# Command DTOs
# ============================================================================


class CreateInvitationCommand(BaseModel):
    """Command for inviting a person to a tenant"""

    email: str
    role: EmployeeRole = EmployeeRole.staff
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class SignupInput(BaseModel):
    """New-account details used when accepting without an existing account"""

    email: str
    password: str
    name: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class InvitationView(BaseModel):
    id: str
    tenant_id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: EmployeeRole
    status: InvitationStatus
    effective_status: InvitationStatus
    invited_by_user_id: Optional[str] = None
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, invitation: Invitation, now: Optional[datetime] = None
    ) -> "InvitationView":
        return cls(
            id=str(invitation.id),
            tenant_id=invitation.tenant_id,
            email=invitation.email,
            first_name=invitation.first_name,
            last_name=invitation.last_name,
            role=invitation.role,
            status=invitation.status,
            effective_status=invitation.effective_status(now),
            invited_by_user_id=invitation.invited_by_user_id,
            expires_at=invitation.expires_at,
            accepted_at=invitation.accepted_at,
            created_at=invitation.created_at,
            updated_at=invitation.updated_at,
        )


class IssuedInvitationResponse(BaseModel):
    """Response for create and resend; the only place the token is ever returned"""

    invitation: InvitationView
    token: str
    invitation_url: str
    email_sent: bool


class InvitationDetailsResponse(BaseModel):
    """Public view of an invitation looked up by token"""

    invitation: InvitationView
    organization_name: Optional[str] = None


class ValidateTokenResponse(BaseModel):
    valid: bool
    reason: Optional[str] = None
    invitation: Optional[InvitationView] = None


class CheckEmailInvitedResponse(BaseModel):
    invited: bool
    invitation: Optional[InvitationView] = None


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    invitation: InvitationView
    employee: EmployeeView
    user: UserView
