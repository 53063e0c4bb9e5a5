import asyncio
from uuid import UUID

import pytest
import pytest_asyncio
from sqlmodel import select

from src.adapter.repositories.invitation_repository import InvitationRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invitations import (
    AcceptInvitationUseCase,
    CreateInvitationCommand,
    CreateInvitationUseCase,
    ResendInvitationUseCase,
    RevokeInvitationUseCase,
    UpdateInvitationRoleUseCase,
)
from src.domain.entities import Employee, EmployeeRole, Invitation, InvitationStatus, UserRole

BASE_URL = "https://pm.acme.com"


@pytest_asyncio.fixture
async def invitation(client, owner_headers, test_data):
    response = await client.post(
        "/invitations", json=test_data.get_copy("invitee"), headers=owner_headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest_asyncio.fixture
async def owner_id(client, owner_headers):
    response = await client.get("/auth/session", headers=owner_headers)
    return response.json()["data"]["user_id"]


@pytest_asyncio.fixture
async def bob(app, test_data):
    person = test_data.get("invitee_signup")
    return await app.state.auth_provider.sign_up_with_password(
        person["email"], person["password"], person["name"]
    )


@pytest.fixture
def accept(app, session_factory, invitation, bob):
    async def run():
        async with session_factory() as session:
            use_case = AcceptInvitationUseCase(
                SqlAlchemyUnitOfWork(session), app.state.auth_provider
            )
            return await use_case.execute(invitation["token"], session_identity=bob)

    return run


@pytest.fixture
def accept_after_read(monkeypatch, accept):
    """Commit an accept right after the given repository read returns"""

    def patch(method_name: str):
        original = getattr(InvitationRepository, method_name)
        outcome = {}

        async def read_then_accept(self, *args, **kwargs):
            row = await original(self, *args, **kwargs)
            if "result" not in outcome:
                outcome["result"] = await accept()
            return row

        monkeypatch.setattr(InvitationRepository, method_name, read_then_accept)
        return outcome

    return patch


async def stored_state(session_factory, invitation_id: UUID, user_id: str):
    async with session_factory() as session:
        row = (
            await session.exec(select(Invitation).where(Invitation.id == invitation_id))
        ).one()
        employees = (
            await session.exec(select(Employee).where(Employee.user_id == user_id))
        ).all()
    return row, employees


def in_own_session(session_factory, build, *args):
    async def run():
        async with session_factory() as session:
            return await build(SqlAlchemyUnitOfWork(session)).execute(*args)

    return run()


@pytest.mark.asyncio
async def test_concurrent_accepts_have_one_winner(accept, session_factory, bob):
    first, second = await asyncio.gather(accept(), accept())

    outcomes = sorted([first, second], key=lambda result: result.is_ok())
    assert outcomes[0].is_err()
    assert outcomes[0].error.code == "INVITATION_ACCEPTED"
    assert outcomes[1].is_ok()

    async with session_factory() as session:
        employees = (
            await session.exec(select(Employee).where(Employee.user_id == bob.user_id))
        ).all()
    assert len(employees) == 1


@pytest.mark.asyncio
async def test_concurrent_revoke_and_accept_agree(
    accept, session_factory, invitation, owner_id, bob
):
    invitation_id = UUID(invitation["invitation"]["id"])

    accepted, revoked = await asyncio.gather(
        accept(),
        in_own_session(
            session_factory,
            RevokeInvitationUseCase,
            owner_id,
            "acme",
            UserRole.tenant_admin,
            invitation_id,
        ),
    )

    assert accepted.is_ok() != revoked.is_ok()
    row, employees = await stored_state(session_factory, invitation_id, bob.user_id)
    if accepted.is_ok():
        assert revoked.error.code == "INVITATION_ACCEPTED"
        assert row.status == InvitationStatus.accepted
        assert len(employees) == 1
    else:
        assert accepted.error.code == "INVITATION_REVOKED"
        assert row.status == InvitationStatus.revoked
        assert employees == []


@pytest.mark.asyncio
async def test_revoke_cannot_overwrite_an_accept(
    accept_after_read, session_factory, invitation, owner_id, bob
):
    invitation_id = UUID(invitation["invitation"]["id"])
    outcome = accept_after_read("get_for_tenant")

    result = await in_own_session(
        session_factory,
        RevokeInvitationUseCase,
        owner_id,
        "acme",
        UserRole.tenant_admin,
        invitation_id,
    )

    assert outcome["result"].is_ok()
    assert result.error.code == "INVITATION_ACCEPTED"
    row, employees = await stored_state(session_factory, invitation_id, bob.user_id)
    assert row.status == InvitationStatus.accepted
    assert row.accepted_at is not None
    assert len(employees) == 1


@pytest.mark.asyncio
async def test_resend_cannot_rotate_an_accepted_token(
    accept_after_read, session_factory, email_sender, invitation, owner_id, bob
):
    invitation_id = UUID(invitation["invitation"]["id"])
    async with session_factory() as session:
        token_hash = (
            await session.exec(select(Invitation.token_hash).where(Invitation.id == invitation_id))
        ).one()
    outcome = accept_after_read("get_for_tenant")
    sent_before = len(email_sender.sent)

    async with session_factory() as session:
        use_case = ResendInvitationUseCase(SqlAlchemyUnitOfWork(session), email_sender, BASE_URL)
        result = await use_case.execute(owner_id, "acme", UserRole.tenant_admin, invitation_id)

    assert outcome["result"].is_ok()
    assert result.error.code == "INVITATION_ACCEPTED"
    row, _ = await stored_state(session_factory, invitation_id, bob.user_id)
    assert row.status == InvitationStatus.accepted
    assert row.token_hash == token_hash
    assert len(email_sender.sent) == sent_before


@pytest.mark.asyncio
async def test_role_update_cannot_change_an_accepted_invitation(
    accept_after_read, session_factory, invitation, owner_id, bob
):
    invitation_id = UUID(invitation["invitation"]["id"])
    outcome = accept_after_read("get_for_tenant")

    result = await in_own_session(
        session_factory,
        UpdateInvitationRoleUseCase,
        owner_id,
        "acme",
        UserRole.tenant_admin,
        invitation_id,
        EmployeeRole.admin,
    )

    assert outcome["result"].is_ok()
    assert result.error.code == "INVITATION_ACCEPTED"
    row, employees = await stored_state(session_factory, invitation_id, bob.user_id)
    assert row.role == EmployeeRole.staff
    assert employees[0].role == EmployeeRole.staff


@pytest.mark.asyncio
async def test_reinvite_cannot_reopen_an_accepted_invitation(
    accept_after_read, session_factory, email_sender, invitation, owner_id, bob
):
    invitation_id = UUID(invitation["invitation"]["id"])
    outcome = accept_after_read("get_by_tenant_and_email")

    async with session_factory() as session:
        use_case = CreateInvitationUseCase(SqlAlchemyUnitOfWork(session), email_sender, BASE_URL)
        result = await use_case.execute(
            owner_id,
            "acme",
            UserRole.tenant_admin,
            CreateInvitationCommand(email="bob@acme.com", role=EmployeeRole.manager),
        )

    assert outcome["result"].is_ok()
    assert result.error.code == "INVITATION_ALREADY_ACCEPTED"
    row, employees = await stored_state(session_factory, invitation_id, bob.user_id)
    assert row.status == InvitationStatus.accepted
    assert row.role == EmployeeRole.staff
    assert len(employees) == 1
