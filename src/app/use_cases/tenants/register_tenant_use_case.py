"""
Register Tenant Use Case

Creates a tenant in PENDING together with its organization profile and,
optionally, its owner membership.
"""

import logging
import re
from typing import Optional

from libs.result import Result, Return
from src.app.errors import ConflictError, NotFoundError, ValidationError
from src.app.services.auth_provider import IAuthProvider, discard_identity
from src.app.services.email_sender import EmailTemplate, IEmailSender, send_best_effort
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utcnow
from src.domain.entities import (
    AuditEvent,
    Employee,
    EmployeeRole,
    EmployeeStatus,
    Organization,
    Tenant,
    TenantStatus,
    user_role_for,
)

from .dtos import EmployeeView, RegisterTenantCommand, RegisterTenantResponse, TenantView

logger = logging.getLogger(__name__)

TENANT_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]{0,61}[a-z0-9]$")


class RegisterTenantUseCase:
    """
    Use case for registering a new tenant.

    Business Rules:
    - Tenant id is a lower-case slug, unique even among soft-deleted tenants
    - Tenant starts in PENDING with an empty moderation log
    - Tenant, organization and owner membership are written in one transaction
    - Owner must not already belong to a tenant
    - An owner without an account is signed up through the auth provider;
      if the transaction then fails, that identity is deleted again
    - Registration acknowledgement email is best-effort
    """

    def __init__(
        self, uow: UnitOfWork, auth_provider: IAuthProvider, email_sender: IEmailSender
    ):
        self.uow = uow
        self.auth_provider = auth_provider
        self.email_sender = email_sender

    async def execute(self, command: RegisterTenantCommand) -> Result[RegisterTenantResponse]:
        """
        Execute register tenant use case.

        Args:
            command: RegisterTenantCommand with tenant id, organization and owner

        Returns:
            Result with RegisterTenantResponse DTO, or Error

        Raises:
            OperationError: store or auth provider failure
        """
        tenant_id = command.tenant_id.strip().lower()
        if not TENANT_ID_PATTERN.match(tenant_id):
            return Return.err(
                ValidationError(
                    "INVALID_TENANT_ID",
                    "Tenant id must be 2-63 lower-case letters, digits or hyphens",
                )
            )
        if not command.organization.name.strip():
            return Return.err(
                ValidationError("ORGANIZATION_NAME_REQUIRED", "Organization name is required")
            )

        owner = command.owner
        owner_email = normalize_email(owner.email) if owner else None
        if owner is not None and not owner_email:
            return Return.err(ValidationError("INVALID_EMAIL", "Owner email is required"))

        # 1. Pre-checks before touching the auth provider
        owner_user = None
        async with self.uow:
            if await self.uow.tenants.get_by_id(tenant_id, include_deleted=True):
                return Return.err(
                    ConflictError("TENANT_ALREADY_EXISTS", "Tenant id is already taken")
                )

            if owner_email:
                owner_user = await self.uow.users.get_by_email(owner_email)
                if owner_user is not None and owner_user.tenant_id:
                    return Return.err(
                        ConflictError(
                            "OWNER_ALREADY_IN_TENANT", "Owner already belongs to a tenant"
                        )
                    )
                if owner_user is None and not owner.password:
                    return Return.err(
                        ValidationError(
                            "OWNER_PASSWORD_REQUIRED",
                            "Password is required to create the owner account",
                        )
                    )

        # 2. Resolve the owner identity
        owner_user_id: Optional[str] = owner_user.id if owner_user else None
        created_user_id: Optional[str] = None
        if owner_email and owner_user is None:
            identity = await self.auth_provider.sign_up_with_password(
                owner_email, owner.password, owner.name
            )
            owner_user_id = created_user_id = identity.user_id

        # 3. Write everything in one transaction
        try:
            result = await self._create(tenant_id, command, owner_user_id)
        except Exception:
            if created_user_id:
                await discard_identity(self.auth_provider, created_user_id)
            raise

        if result.is_err():
            if created_user_id:
                await discard_identity(self.auth_provider, created_user_id)
            return result

        # 4. Acknowledge (best-effort)
        if owner_email:
            await send_best_effort(
                self.email_sender,
                owner_email,
                EmailTemplate.tenant_registered,
                {
                    "organization_name": command.organization.name.strip(),
                    "owner_name": (owner.name or owner_email),
                },
            )

        logger.info(f"Tenant {tenant_id} registered")
        return result

    async def _create(
        self, tenant_id: str, command: RegisterTenantCommand, owner_user_id: Optional[str]
    ) -> Result[RegisterTenantResponse]:
        async with self.uow:
            now = utcnow()

            tenant = await self.uow.tenants.create(
                Tenant(
                    id=tenant_id,
                    status=TenantStatus.pending,
                    owner_id=owner_user_id,
                    created_by=command.created_by or owner_user_id,
                    tenant_metadata=command.metadata,
                    moderation_log=[],
                )
            )

            organization_data = command.organization.model_dump()
            organization_data["name"] = organization_data["name"].strip()
            organization = await self.uow.organizations.create(
                Organization(tenant_id=tenant_id, **organization_data)
            )

            owner_employee = None
            if owner_user_id:
                user = await self.uow.users.get_by_id(owner_user_id)
                if user is None:
                    return Return.err(NotFoundError("USER_NOT_FOUND", "Owner account not found"))
                if user.tenant_id:
                    return Return.err(
                        ConflictError(
                            "OWNER_ALREADY_IN_TENANT", "Owner already belongs to a tenant"
                        )
                    )

                owner_employee = await self.uow.employees.create(
                    Employee(
                        tenant_id=tenant_id,
                        user_id=user.id,
                        role=EmployeeRole.admin,
                        status=EmployeeStatus.active,
                        joined_at=now,
                    )
                )

                user.tenant_id = tenant_id
                if not user.is_platform_admin:
                    user.role = user_role_for(EmployeeRole.admin)
                await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=command.created_by or owner_user_id,
                    action="tenant_registered",
                    event_metadata={"owner_id": owner_user_id},
                )
            )

            await self.uow.commit()

            return Return.ok(
                RegisterTenantResponse(
                    tenant=TenantView.from_entity(tenant, organization),
                    owner=EmployeeView.from_entity(owner_employee) if owner_employee else None,
                )
            )
