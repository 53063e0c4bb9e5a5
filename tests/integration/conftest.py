from typing import Any, Dict, List, Tuple

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.app import create_app
from src.app.services.email_sender import EmailTemplate, IEmailSender
from src.domain import entities  # noqa: F401
from tests.fixtures.json_loader import TestDataLoader
from tests.utils.auth import sign_in


class RecordingEmailSender(IEmailSender):
    """Keeps every email instead of delivering it"""

    def __init__(self):
        self.sent: List[Tuple[str, EmailTemplate, Dict[str, Any]]] = []
        self.fail = False

    async def send(self, to: str, template: EmailTemplate, data: Dict[str, Any]) -> bool:
        if self.fail:
            raise ConnectionError("SMTP unavailable")
        self.sent.append((to, template, data))
        return True

    def last(self, template: EmailTemplate) -> Tuple[str, Dict[str, Any]]:
        for to, sent_template, data in reversed(self.sent):
            if sent_template == template:
                return to, data
        raise AssertionError(f"No {template.value} email was sent")


class TestConfig(ApplicationConfig):
    ADMIN_EMAIL = TestDataLoader.get("platform_admin.email")
    ADMIN_PASSWORD = TestDataLoader.get("platform_admin.password")
    ADMIN_NAME = TestDataLoader.get("platform_admin.name")
    PM_APP_URL = "https://pm.acme.com"
    LOGIN_URL = "https://pm.acme.com/login"
    SMTP_HOST = ""


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
def email_sender():
    return RecordingEmailSender()


@pytest_asyncio.fixture
def app(session_factory, email_sender):
    return create_app(TestConfig, session_factory=session_factory, email_sender=email_sender)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_headers(client, test_data):
    response = await client.post("/setup/admin")
    assert response.status_code == 201, response.text

    admin = test_data.get("platform_admin")
    return await sign_in(client, admin["email"], admin["password"])


@pytest_asyncio.fixture
async def registered_tenant(client, test_data):
    response = await client.post("/tenants", json=test_data.get_copy("tenant_registration"))
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest_asyncio.fixture
async def approved_tenant(client, admin_headers, registered_tenant):
    tenant_id = registered_tenant["tenant"]["id"]
    response = await client.patch(
        f"/admin/tenants/{tenant_id}/approve", headers=admin_headers
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


@pytest_asyncio.fixture
async def owner_headers(client, test_data, approved_tenant):
    owner = test_data.get("tenant_registration.owner")
    return await sign_in(client, owner["email"], owner["password"])
