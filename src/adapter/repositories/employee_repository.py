from typing import Optional

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.store_errors import translate_store_errors
from src.app.repositories.employee_repository import IEmployeeRepository
from src.domain.entities import Employee

_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class EmployeeRepository(IEmployeeRepository):
    """Employee repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_tenant_and_user(self, tenant_id: str, user_id: str) -> Optional[Employee]:
        """Get employee row by tenant and user"""
        stmt = select(Employee).where(
            Employee.tenant_id == tenant_id, Employee.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, employee: Employee) -> Employee:
        """Create a new employee"""
        with translate_store_errors("User is already an employee of this tenant"):
            self.session.add(employee)
            await self.session.flush()
            await self.session.refresh(employee)
        return employee

    async def add_if_absent(self, employee: Employee) -> Employee:
        """Insert ... ON CONFLICT (tenant_id, user_id) DO NOTHING"""
        insert = _UPSERT_INSERTS.get(self.session.bind.dialect.name)
        if insert is None:
            existing = await self.get_by_tenant_and_user(employee.tenant_id, employee.user_id)
            return existing or await self.create(employee)

        stmt = (
            insert(Employee)
            .values(**employee.model_dump())
            .on_conflict_do_nothing(index_elements=["tenant_id", "user_id"])
        )
        with translate_store_errors():
            await self.session.execute(stmt)
        return await self.get_by_tenant_and_user(employee.tenant_id, employee.user_id)

    async def delete_by_tenant_id(self, tenant_id: str) -> int:
        """Delete every employee of a tenant"""
        with translate_store_errors():
            result = await self.session.execute(
                delete(Employee).where(Employee.tenant_id == tenant_id)
            )
        return result.rowcount
