"""
Admin API Routes - Platform Moderation Endpoints

Every endpoint requires a platform administrator (SUPER_ADMIN or ADMIN).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.envelope import ApiResponse, PaginatedResponse, ok, paginated
from src.api.error import raise_for_error
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    ApproveTenantUseCase,
    HardDeleteTenantResponse,
    HardDeleteTenantUseCase,
    ListTenantsUseCase,
    RecoverTenantUseCase,
    ReinstateTenantUseCase,
    RejectTenantUseCase,
    SoftDeleteTenantUseCase,
    SuspendTenantUseCase,
)
from src.app.use_cases.tenants import TenantView
from src.app.use_cases.users import Actor
from src.depends import get_config, get_current_actor, get_email_sender, get_unit_of_work
from src.domain.entities import TenantStatus

router = APIRouter(prefix="/admin", tags=["Admin"])


class ModerationRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=1000, description="Moderator note")


@router.get(
    "/tenants",
    status_code=status.HTTP_200_OK,
    response_model=PaginatedResponse[TenantView],
)
async def list_tenants(
    status_filter: Optional[TenantStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Matches tenant id or organization name"),
    page: int = Query(1),
    limit: int = Query(20),
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListTenantsUseCase(uow).execute(
        actor, status=status_filter, search=search, page=page, limit=limit
    )

    if result.is_err():
        raise_for_error(result.error)

    return paginated(result.value)


@router.patch(
    "/tenants/{tenant_id}/approve",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[TenantView],
)
async def approve_tenant(
    tenant_id: str,
    request: Optional[ModerationRequest] = None,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Approve Tenant

    PENDING -> APPROVED, appends to the moderation log and notifies the owner.

    Raises:
        - 403 Forbidden: PLATFORM_ADMIN_REQUIRED
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: INVALID_STATUS_TRANSITION, TENANT_STATUS_CHANGED
    """
    use_case = ApproveTenantUseCase(uow, email_sender, config.LOGIN_URL)
    result = await use_case.execute(actor, tenant_id, request.reason if request else None)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Tenant approved")


@router.patch(
    "/tenants/{tenant_id}/reject",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[TenantView],
)
async def reject_tenant(
    tenant_id: str,
    request: ModerationRequest,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Reject Tenant

    PENDING -> REJECTED; a reason is mandatory.

    Raises:
        - 400 Bad Request: REJECTION_REASON_REQUIRED
        - 403 Forbidden: PLATFORM_ADMIN_REQUIRED
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: INVALID_STATUS_TRANSITION, TENANT_STATUS_CHANGED
    """
    use_case = RejectTenantUseCase(uow, email_sender, config.SUPPORT_EMAIL)
    result = await use_case.execute(actor, tenant_id, request.reason)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Tenant rejected")


@router.patch(
    "/tenants/{tenant_id}/suspend",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[TenantView],
)
async def suspend_tenant(
    tenant_id: str,
    request: Optional[ModerationRequest] = None,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SuspendTenantUseCase(uow).execute(
        actor, tenant_id, request.reason if request else None
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Tenant suspended")


@router.patch(
    "/tenants/{tenant_id}/reinstate",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[TenantView],
)
async def reinstate_tenant(
    tenant_id: str,
    request: Optional[ModerationRequest] = None,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ReinstateTenantUseCase(uow).execute(
        actor, tenant_id, request.reason if request else None
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Tenant reinstated")


@router.delete(
    "/tenants/{tenant_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[TenantView],
)
async def soft_delete_tenant(
    tenant_id: str,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Soft delete; the tenant disappears from lookups until recovered."""
    result = await SoftDeleteTenantUseCase(uow).execute(actor, tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Tenant deleted")


@router.post(
    "/tenants/{tenant_id}/recover",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[TenantView],
)
async def recover_tenant(
    tenant_id: str,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RecoverTenantUseCase(uow).execute(actor, tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Tenant recovered")


@router.delete(
    "/tenants/{tenant_id}/hard-delete",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[HardDeleteTenantResponse],
)
async def hard_delete_tenant(
    tenant_id: str,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Hard Delete Tenant

    Purges the tenant with its organization, employees and invitations.
    Users are detached, not deleted. Audit events are kept.
    """
    result = await HardDeleteTenantUseCase(uow).execute(actor, tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Tenant permanently deleted")
