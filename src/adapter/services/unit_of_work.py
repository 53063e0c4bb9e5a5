from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.employee_repository import EmployeeRepository
from src.adapter.repositories.invitation_repository import InvitationRepository
from src.adapter.repositories.organization_repository import OrganizationRepository
from src.adapter.repositories.store_errors import translate_store_errors
from src.adapter.repositories.tenant_repository import TenantRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.tenants = TenantRepository(self.session)
        self.organizations = OrganizationRepository(self.session)
        self.employees = EmployeeRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Detach before rollback so loaded entities are not expired
        self.session.expunge_all()
        await self.rollback()

    async def commit(self):
        with translate_store_errors():
            await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
