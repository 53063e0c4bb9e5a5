"""
Tenant API Routes

Registration and tenant self-service.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.envelope import ApiResponse, ok
from src.api.error import raise_for_error
from src.app.services.auth_provider import AuthIdentity, IAuthProvider
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants import (
    GetTenantUseCase,
    OrganizationInput,
    OrganizationView,
    OwnerInput,
    RegisterTenantCommand,
    RegisterTenantResponse,
    RegisterTenantUseCase,
    TenantView,
    UpdateOrganizationCommand,
    UpdateOrganizationUseCase,
)
from src.app.use_cases.users import Actor
from src.depends import (
    get_auth_provider,
    get_current_actor,
    get_email_sender,
    get_optional_identity,
    get_unit_of_work,
)

router = APIRouter(prefix="/tenants", tags=["Tenant"])


class OwnerRequest(BaseModel):
    email: EmailStr = Field(..., description="Owner email")
    name: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(
        None, description="Required only when the owner has no account yet"
    )


class RegisterTenantRequest(BaseModel):
    """
    Register tenant HTTP request payload

    Validates incoming request before converting to RegisterTenantCommand.
    """

    tenant_id: str = Field(..., min_length=2, max_length=63, description="Tenant slug")
    organization: OrganizationInput
    owner: Optional[OwnerRequest] = None
    metadata: Optional[Dict[str, Any]] = None


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[RegisterTenantResponse],
)
async def register_tenant(
    request: RegisterTenantRequest,
    identity: Optional[AuthIdentity] = Depends(get_optional_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Register Tenant

    Creates a PENDING tenant with its organization profile and, when an
    owner is given, the owner's ADMIN membership.

    Raises:
        - 400 Bad Request: INVALID_TENANT_ID, OWNER_PASSWORD_REQUIRED, INVALID_PASSWORD
        - 409 Conflict: TENANT_ALREADY_EXISTS, OWNER_ALREADY_IN_TENANT, EMAIL_ALREADY_REGISTERED
        - 500 Internal Server Error: Server error
    """
    command = RegisterTenantCommand(
        tenant_id=request.tenant_id,
        organization=request.organization,
        owner=OwnerInput(**request.owner.model_dump()) if request.owner else None,
        metadata=request.metadata,
        created_by=identity.user_id if identity else None,
    )

    use_case = RegisterTenantUseCase(uow, auth_provider, email_sender)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Tenant registered and awaiting approval")


@router.get(
    "/{tenant_id}", status_code=status.HTTP_200_OK, response_model=ApiResponse[TenantView]
)
async def get_tenant(
    tenant_id: str,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Tenant

    Platform administrators see any tenant; others only their own.

    Raises:
        - 401 Unauthorized: Missing or invalid session
        - 403 Forbidden: TENANT_ACCESS_REQUIRED
        - 404 Not Found: TENANT_NOT_FOUND
    """
    result = await GetTenantUseCase(uow).execute(actor, tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value)


@router.patch(
    "/{tenant_id}/organization",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[OrganizationView],
)
async def update_organization(
    tenant_id: str,
    request: UpdateOrganizationCommand,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Organization Profile

    Raises:
        - 400 Bad Request: ORGANIZATION_NAME_REQUIRED
        - 403 Forbidden: caller is not a tenant administrator
        - 404 Not Found: TENANT_NOT_FOUND
    """
    result = await UpdateOrganizationUseCase(uow).execute(actor, tenant_id, request)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Organization updated")
