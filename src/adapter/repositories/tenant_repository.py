from typing import List, Optional, Tuple

from sqlalchemy import delete, func, or_, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.store_errors import translate_store_errors
from src.app.repositories.tenant_repository import ITenantRepository
from src.domain.base import utcnow
from src.domain.entities import Organization, Tenant, TenantStatus


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: str, include_deleted: bool = False) -> Optional[Tenant]:
        """Get tenant by ID; soft-deleted tenants are hidden unless asked for"""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        if not include_deleted:
            stmt = stmt.where(Tenant.deleted.is_(False))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        status: Optional[TenantStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Tenant], int]:
        """List non-deleted tenants, newest first"""
        stmt = select(Tenant).where(Tenant.deleted.is_(False))
        if status is not None:
            stmt = stmt.where(Tenant.status == status)
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.outerjoin(Organization, Organization.tenant_id == Tenant.id).where(
                or_(
                    func.lower(Tenant.id).like(pattern),
                    func.lower(Organization.name).like(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            stmt.order_by(Tenant.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        with translate_store_errors("Tenant already exists"):
            self.session.add(tenant)
            await self.session.flush()
            await self.session.refresh(tenant)
        return tenant

    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        tenant.updated_at = utcnow()
        with translate_store_errors():
            self.session.add(tenant)
            await self.session.flush()
            await self.session.refresh(tenant)
        return tenant

    async def apply_transition(
        self,
        tenant_id: str,
        expected_revision: int,
        status: TenantStatus,
        moderation_log: List[dict],
    ) -> Optional[Tenant]:
        """Conditional status write guarded by the revision counter"""
        stmt = (
            update(Tenant)
            .where(
                Tenant.id == tenant_id,
                Tenant.revision == expected_revision,
                Tenant.deleted.is_(False),
            )
            .values(
                status=status,
                moderation_log=moderation_log,
                revision=expected_revision + 1,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        with translate_store_errors():
            result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None

        refreshed = await self.session.execute(
            select(Tenant)
            .where(Tenant.id == tenant_id)
            .execution_options(populate_existing=True)
        )
        return refreshed.scalar_one()

    async def delete(self, tenant_id: str) -> None:
        """Permanently delete a tenant row"""
        with translate_store_errors():
            await self.session.execute(delete(Tenant).where(Tenant.id == tenant_id))
