"""
Invitation Use Cases

Issue, manage and accept employee invitations.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .check_email_invited_use_case import CheckEmailInvitedUseCase
from .create_invitation_use_case import CreateInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    CheckEmailInvitedResponse,
    CreateInvitationCommand,
    InvitationDetailsResponse,
    InvitationView,
    IssuedInvitationResponse,
    SignupInput,
    ValidateTokenResponse,
)
from .get_invitation_by_token_use_case import GetInvitationByTokenUseCase
from .get_invitation_use_case import GetInvitationUseCase
from .list_invitations_use_case import ListInvitationsUseCase
from .resend_invitation_use_case import ResendInvitationUseCase
from .revoke_invitation_use_case import RevokeInvitationUseCase
from .update_invitation_role_use_case import UpdateInvitationRoleUseCase
from .validate_invitation_token_use_case import ValidateInvitationTokenUseCase

__all__ = [
    "CreateInvitationUseCase",
    "ResendInvitationUseCase",
    "RevokeInvitationUseCase",
    "UpdateInvitationRoleUseCase",
    "ListInvitationsUseCase",
    "GetInvitationUseCase",
    "CheckEmailInvitedUseCase",
    "GetInvitationByTokenUseCase",
    "ValidateInvitationTokenUseCase",
    "AcceptInvitationUseCase",
    "CreateInvitationCommand",
    "SignupInput",
    "InvitationView",
    "IssuedInvitationResponse",
    "InvitationDetailsResponse",
    "ValidateTokenResponse",
    "CheckEmailInvitedResponse",
    "AcceptInvitationResponse",
]
