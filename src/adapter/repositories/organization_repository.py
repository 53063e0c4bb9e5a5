from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.store_errors import translate_store_errors
from src.app.repositories.organization_repository import IOrganizationRepository
from src.domain.base import utcnow
from src.domain.entities import Organization


class OrganizationRepository(IOrganizationRepository):
    """Organization repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_tenant_id(self, tenant_id: str) -> Optional[Organization]:
        stmt = select(Organization).where(Organization.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, organization: Organization) -> Organization:
        with translate_store_errors("Organization already exists"):
            self.session.add(organization)
            await self.session.flush()
            await self.session.refresh(organization)
        return organization

    async def update(self, organization: Organization) -> Organization:
        organization.updated_at = utcnow()
        with translate_store_errors():
            self.session.add(organization)
            await self.session.flush()
            await self.session.refresh(organization)
        return organization

    async def delete_by_tenant_id(self, tenant_id: str) -> int:
        with translate_store_errors():
            result = await self.session.execute(
                delete(Organization).where(Organization.tenant_id == tenant_id)
            )
        return result.rowcount
