import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.users import Actor
from src.domain.entities import UserRole

REPOSITORIES = ("users", "tenants", "organizations", "employees", "invitations", "audit_events")


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Every repository method is awaitable
    for name in REPOSITORIES:
        setattr(uow, name, AsyncMock())
    return uow


@pytest.fixture
def email_sender():
    sender = AsyncMock()
    sender.send.return_value = True
    return sender


@pytest.fixture
def auth_provider():
    return AsyncMock()


@pytest.fixture
def platform_admin():
    return Actor(user_id="admin-1", email="root@platform.io", role=UserRole.super_admin)


@pytest.fixture
def tenant_member():
    return Actor(
        user_id="user-1", email="staff@acme.com", role=UserRole.member, tenant_id="acme"
    )
