"""
Shared tenant status transition.

The status write is conditional on the revision read here, so two
moderators racing on one tenant cannot both succeed, and the moderation
log is only ever extended.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from src.app.errors import ConflictError, NotFoundError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import ModerationEntry, Tenant, TenantStatus, can_transition

logger = logging.getLogger(__name__)


async def transition_tenant(
    uow: UnitOfWork,
    tenant_id: str,
    target: TenantStatus,
    actor_id: str,
    reason: Optional[str] = None,
) -> Result[Tenant]:
    """Must be called inside an open unit of work; the caller commits."""
    tenant = await uow.tenants.get_by_id(tenant_id)
    if tenant is None:
        return Return.err(NotFoundError("TENANT_NOT_FOUND", "Tenant not found"))

    if not can_transition(tenant.status, target):
        return Return.err(
            ConflictError(
                "INVALID_STATUS_TRANSITION",
                f"Tenant is {tenant.status.value} and cannot become {target.value}",
            )
        )

    entry = ModerationEntry(action=target, by=actor_id, reason=reason, at=utcnow())
    updated = await uow.tenants.apply_transition(
        tenant.id, tenant.revision, target, tenant.log_with(entry)
    )
    if updated is None:
        return Return.err(
            ConflictError("TENANT_STATUS_CHANGED", "Tenant status changed concurrently")
        )

    logger.info(f"Tenant {tenant_id}: {tenant.status.value} -> {target.value} by {actor_id}")
    return Return.ok(updated)
