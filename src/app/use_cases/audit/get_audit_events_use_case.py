"""
Get Audit Events Use Case

Retrieves lifecycle audit events for a tenant with cursor pagination.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.errors import NotFoundError, ValidationError
from src.app.services.authorization import check_tenant_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import MAX_PAGE_SIZE
from src.domain.entities import PLATFORM_ADMIN_ROLES, UserRole


class AuditEventView(BaseModel):
    id: str
    action: str
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    timestamp: datetime
    metadata: Dict[str, Any] = {}


class AuditEventsResponse(BaseModel):
    events: List[AuditEventView]
    next_cursor: Optional[str] = None


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events for a tenant.

    Business Rules:
    - Caller must be a tenant administrator (or a platform administrator)
    - Results are tenant-scoped and ordered newest first
    - Each event includes action, user_email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        tenant_id: str,
        user_role: Optional[UserRole] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[AuditEventsResponse]:
        """
        Execute get audit events use case.

        Args:
            user_id: Caller id
            tenant_id: Tenant slug
            user_role: Caller's role when bound to this tenant
            limit: Maximum number of events to return
            cursor: Opaque cursor from a previous page

        Returns:
            Result with events list and next_cursor, or Error
        """
        if limit < 1 or limit > MAX_PAGE_SIZE:
            return Return.err(
                ValidationError("INVALID_PAGINATION", f"limit must be between 1 and {MAX_PAGE_SIZE}")
            )

        async with self.uow:
            if user_role not in PLATFORM_ADMIN_ROLES:
                denied = await check_tenant_admin(self.uow, user_id, tenant_id, user_role)
                if denied:
                    return Return.err(denied)

            tenant = await self.uow.tenants.get_by_id(tenant_id, include_deleted=True)
            if tenant is None:
                return Return.err(NotFoundError("TENANT_NOT_FOUND", "Tenant not found"))

            events, next_cursor = await self.uow.audit_events.get_by_tenant_paginated(
                tenant_id, limit=limit, cursor=cursor
            )

            # Resolve each distinct user once
            emails: Dict[str, Optional[str]] = {}
            for event in events:
                if event.user_id and event.user_id not in emails:
                    user = await self.uow.users.get_by_id(event.user_id)
                    emails[event.user_id] = user.email if user else None

            views = [
                AuditEventView(
                    id=str(event.id),
                    action=event.action,
                    user_id=event.user_id,
                    user_email=emails.get(event.user_id) if event.user_id else None,
                    timestamp=event.created_at,
                    metadata=event.event_metadata or {},
                )
                for event in events
            ]
            return Return.ok(AuditEventsResponse(events=views, next_cursor=next_cursor))
