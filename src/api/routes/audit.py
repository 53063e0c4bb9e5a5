"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.envelope import ApiResponse, ok
from src.api.error import ClientError, raise_for_error
from src.app.errors import ValidationError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import AuditEventsResponse, GetAuditEventsUseCase
from src.app.use_cases.users import Actor
from src.depends import get_current_actor, get_unit_of_work

router = APIRouter(prefix="/audit-events", tags=["Audit"])


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[AuditEventsResponse],
)
async def get_audit_events(
    tenant_id: Optional[str] = Query(None, description="Defaults to the caller's tenant"),
    limit: int = Query(50, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Audit Events

    Tenant lifecycle and invitation events, newest first.

    Returns:
        - events: List of audit events
        - next_cursor: Cursor for next page (null if no more events)

    Raises:
        - 400 Bad Request: TENANT_REQUIRED, INVALID_PAGINATION
        - 401 Unauthorized: Missing or invalid session
        - 403 Forbidden: caller is not an administrator of the tenant
        - 404 Not Found: TENANT_NOT_FOUND
    """
    tenant_id = tenant_id or actor.tenant_id
    if not tenant_id:
        raise ClientError(ValidationError("TENANT_REQUIRED", "tenant_id is required"))

    result = await GetAuditEventsUseCase(uow).execute(
        user_id=actor.user_id,
        tenant_id=tenant_id,
        user_role=actor.role if actor.is_platform_admin else actor.role_in(tenant_id),
        limit=limit,
        cursor=cursor,
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value)
