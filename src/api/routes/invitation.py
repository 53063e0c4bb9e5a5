"""
Invitation API Routes

Management endpoints act on the caller's tenant and need a tenant
administrator. Token endpoints are public: the token is the credential.
"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from src.api.envelope import ApiResponse, PaginatedResponse, ok, paginated
from src.api.error import ClientError, raise_for_error
from src.app.errors import ForbiddenError
from src.app.services.auth_provider import AuthIdentity, IAuthProvider
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CheckEmailInvitedResponse,
    CheckEmailInvitedUseCase,
    CreateInvitationCommand,
    CreateInvitationUseCase,
    GetInvitationByTokenUseCase,
    GetInvitationUseCase,
    InvitationDetailsResponse,
    InvitationView,
    IssuedInvitationResponse,
    ListInvitationsUseCase,
    ResendInvitationUseCase,
    RevokeInvitationUseCase,
    SignupInput,
    UpdateInvitationRoleUseCase,
    ValidateInvitationTokenUseCase,
    ValidateTokenResponse,
)
from src.app.use_cases.users import Actor
from src.depends import (
    get_auth_provider,
    get_config,
    get_current_actor,
    get_email_sender,
    get_optional_identity,
    get_unit_of_work,
)
from src.domain.entities import EmployeeRole, InvitationStatus

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class CreateInvitationRequest(BaseModel):
    email: EmailStr = Field(..., description="Invitee email")
    role: EmployeeRole = Field(EmployeeRole.staff, description="Role granted on acceptance")
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class UpdateInvitationRoleRequest(BaseModel):
    role: EmployeeRole


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    name: Optional[str] = Field(None, max_length=255)


class AcceptInvitationRequest(BaseModel):
    """
    Accept invitation HTTP request payload

    Signed-in callers send no body. Otherwise either an existing user_id or
    signup details for a new account.
    """

    user_id: Optional[str] = Field(None, description="Existing account to accept with")
    signup: Optional[SignupRequest] = Field(None, description="New account details")


def tenant_scope(actor: Actor) -> str:
    if not actor.tenant_id:
        raise ClientError(
            ForbiddenError("TENANT_ACCESS_REQUIRED", "Tenant access required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return actor.tenant_id


def invitation_ttl(config) -> timedelta:
    return timedelta(days=config.INVITATION_TTL_DAYS)


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PaginatedResponse[InvitationView],
)
async def list_invitations(
    status_filter: Optional[InvitationStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Matches email, first or last name"),
    page: int = Query(1),
    limit: int = Query(20),
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    tenant_id = tenant_scope(actor)
    result = await ListInvitationsUseCase(uow).execute(
        actor.user_id,
        tenant_id,
        actor.role_in(tenant_id),
        status=status_filter,
        search=search,
        page=page,
        limit=limit,
    )

    if result.is_err():
        raise_for_error(result.error)

    return paginated(result.value)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[IssuedInvitationResponse],
)
async def create_invitation(
    request: CreateInvitationRequest,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Create Invitation

    Issues a new token for (tenant, email). A pending, expired or revoked
    invitation for the same email is reused and its old token stops working.
    The plaintext token is returned here and in the email, never again.

    Raises:
        - 400 Bad Request: INVALID_EMAIL
        - 403 Forbidden: caller is not a tenant administrator, TENANT_NOT_ACTIVE
        - 409 Conflict: ALREADY_MEMBER, INVITATION_ALREADY_ACCEPTED
    """
    tenant_id = tenant_scope(actor)
    use_case = CreateInvitationUseCase(
        uow, email_sender, config.PM_APP_URL, invitation_ttl(config)
    )
    result = await use_case.execute(
        actor.user_id,
        tenant_id,
        actor.role_in(tenant_id),
        CreateInvitationCommand(**request.model_dump()),
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Invitation sent")


@router.get(
    "/check",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[CheckEmailInvitedResponse],
)
async def check_email_invited(
    email: str = Query(..., min_length=3),
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    tenant_id = tenant_scope(actor)
    result = await CheckEmailInvitedUseCase(uow).execute(
        actor.user_id, tenant_id, actor.role_in(tenant_id), email
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value)


@router.get(
    "/token/{token}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[InvitationDetailsResponse],
)
async def get_invitation_by_token(token: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Get Invitation By Token

    Raises:
        - 404 Not Found: INVITATION_NOT_FOUND (unknown or superseded token)
    """
    result = await GetInvitationByTokenUseCase(uow).execute(token)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value)


@router.get(
    "/token/{token}/validate",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[ValidateTokenResponse],
)
async def validate_invitation_token(token: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ValidateInvitationTokenUseCase(uow).execute(token)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value)


@router.post(
    "/token/{token}/accept",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[AcceptInvitationResponse],
)
async def accept_invitation(
    token: str,
    request: Optional[AcceptInvitationRequest] = None,
    identity: Optional[AuthIdentity] = Depends(get_optional_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    Accept Invitation

    Raises:
        - 400 Bad Request: IDENTITY_REQUIRED, INVALID_PASSWORD
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: INVITATION_NOT_FOUND, USER_NOT_FOUND
        - 409 Conflict: INVITATION_EXPIRED, INVITATION_REVOKED, INVITATION_ACCEPTED,
                        EMAIL_ALREADY_REGISTERED
    """
    request = request or AcceptInvitationRequest()
    signup = SignupInput(**request.signup.model_dump()) if request.signup else None

    use_case = AcceptInvitationUseCase(uow, auth_provider)
    result = await use_case.execute(
        token, session_identity=identity, existing_user_id=request.user_id, signup=signup
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Invitation accepted")


@router.get(
    "/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[InvitationView],
)
async def get_invitation(
    invitation_id: UUID,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    tenant_id = tenant_scope(actor)
    result = await GetInvitationUseCase(uow).execute(
        actor.user_id, tenant_id, actor.role_in(tenant_id), invitation_id
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value)


@router.patch(
    "/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[InvitationView],
)
async def update_invitation_role(
    invitation_id: UUID,
    request: UpdateInvitationRoleRequest,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    tenant_id = tenant_scope(actor)
    result = await UpdateInvitationRoleUseCase(uow).execute(
        actor.user_id, tenant_id, actor.role_in(tenant_id), invitation_id, request.role
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Invitation updated")


@router.post(
    "/{invitation_id}/resend",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[IssuedInvitationResponse],
)
async def resend_invitation(
    invitation_id: UUID,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Resend Invitation

    Rotates the token and resets the expiry of a PENDING or EXPIRED invitation.

    Raises:
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_REVOKED, INVITATION_ACCEPTED
    """
    tenant_id = tenant_scope(actor)
    use_case = ResendInvitationUseCase(
        uow, email_sender, config.PM_APP_URL, invitation_ttl(config)
    )
    result = await use_case.execute(
        actor.user_id, tenant_id, actor.role_in(tenant_id), invitation_id
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Invitation resent")


@router.delete(
    "/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[InvitationView],
)
async def revoke_invitation(
    invitation_id: UUID,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Invitation

    Raises:
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ACCEPTED, INVITATION_REVOKED
    """
    tenant_id = tenant_scope(actor)
    result = await RevokeInvitationUseCase(uow).execute(
        actor.user_id, tenant_id, actor.role_in(tenant_id), invitation_id
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Invitation revoked")
