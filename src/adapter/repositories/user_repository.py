from typing import Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.store_errors import translate_store_errors
from src.app.repositories.user_repository import IUserRepository
from src.domain.base import normalize_email, utcnow
from src.domain.entities import User, UserRole


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email address"""
        stmt = select(User).where(User.email == normalize_email(email))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update(self, user: User) -> User:
        """Update existing user"""
        user.updated_at = utcnow()
        with translate_store_errors("Email already registered"):
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        return user

    async def exists_with_role(self, role: str) -> bool:
        """Check whether any user holds the given platform role"""
        stmt = select(User.id).where(User.role == role).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def detach_from_tenant(self, tenant_id: str) -> int:
        """Clear the tenant binding of every user bound to a tenant"""
        now = utcnow()
        await self.session.execute(
            update(User)
            .where(User.tenant_id == tenant_id, User.role == UserRole.tenant_admin)
            .values(role=UserRole.member, updated_at=now)
        )
        result = await self.session.execute(
            update(User)
            .where(User.tenant_id == tenant_id)
            .values(tenant_id=None, updated_at=now)
        )
        return result.rowcount
