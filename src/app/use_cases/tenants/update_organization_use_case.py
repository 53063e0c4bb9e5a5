"""
Update Organization Use Case

Tenant self-service edit of the organization profile.
"""

from libs.result import Result, Return
from src.app.errors import NotFoundError, ValidationError
from src.app.services.authorization import check_tenant_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.dtos import Actor

from .dtos import OrganizationView, UpdateOrganizationCommand


class UpdateOrganizationUseCase:
    """
    Use case for updating a tenant's organization profile.

    Business Rules:
    - Caller must be a tenant administrator of this tenant
    - Only supplied fields change; name cannot be blanked
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: Actor, tenant_id: str, command: UpdateOrganizationCommand
    ) -> Result[OrganizationView]:
        changes = command.model_dump(exclude_unset=True)
        if "name" in changes:
            if not (changes["name"] or "").strip():
                return Return.err(
                    ValidationError("ORGANIZATION_NAME_REQUIRED", "Organization name is required")
                )
            changes["name"] = changes["name"].strip()

        async with self.uow:
            denied = await check_tenant_admin(
                self.uow, actor.user_id, tenant_id, actor.role_in(tenant_id)
            )
            if denied:
                return Return.err(denied)

            tenant = await self.uow.tenants.get_by_id(tenant_id)
            organization = await self.uow.organizations.get_by_tenant_id(tenant_id)
            if tenant is None or organization is None:
                return Return.err(NotFoundError("TENANT_NOT_FOUND", "Tenant not found"))

            for field, value in changes.items():
                setattr(organization, field, value)
            organization = await self.uow.organizations.update(organization)

            await self.uow.commit()

            return Return.ok(OrganizationView.model_validate(organization))
