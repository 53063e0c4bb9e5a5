from datetime import timedelta
from urllib.parse import parse_qs, urlparse
from uuid import uuid4

import pytest

from src.app.errors import ConflictError, ForbiddenError, ValidationError
from src.app.services.email_sender import EmailTemplate
from src.app.use_cases.invitations import CreateInvitationCommand, CreateInvitationUseCase
from src.domain.base import utcnow
from src.domain.entities import (
    Employee,
    EmployeeRole,
    Invitation,
    InvitationStatus,
    Organization,
    Tenant,
    TenantStatus,
    User,
    UserRole,
)
from src.domain.tokens import hash_token

BASE_URL = "https://pm.example.com/"


def reissue_stored(mock_uow):
    """Apply a reissue to the row get_by_tenant_and_email returned"""

    def reissue(invitation_id, **values):
        invitation = mock_uow.invitations.get_by_tenant_and_email.return_value
        values.pop("at")
        for field, value in values.items():
            setattr(invitation, field, value)
        invitation.status = InvitationStatus.pending
        invitation.accepted_at = None
        return invitation

    return reissue


@pytest.fixture
def arranged_uow(mock_uow):
    """Approved tenant, no prior invitation, invitee unknown"""
    mock_uow.tenants.get_by_id.return_value = Tenant(id="acme", status=TenantStatus.approved)
    mock_uow.users.get_by_email.return_value = None
    mock_uow.invitations.get_by_tenant_and_email.return_value = None
    mock_uow.invitations.create.side_effect = lambda invitation: invitation
    mock_uow.invitations.reissue.side_effect = reissue_stored(mock_uow)
    mock_uow.organizations.get_by_tenant_id.return_value = Organization(
        tenant_id="acme", name="Acme Corp"
    )
    mock_uow.users.get_by_id.return_value = User(
        id="owner-1", email="owner@acme.com", name="Alice Owner"
    )
    return mock_uow


def command(**overrides) -> CreateInvitationCommand:
    data = dict(email=" Bob@Acme.com ", role=EmployeeRole.staff, first_name="Bob")
    data.update(overrides)
    return CreateInvitationCommand(**data)


async def invite(uow, email_sender, **overrides):
    use_case = CreateInvitationUseCase(uow, email_sender, BASE_URL)
    return await use_case.execute("owner-1", "acme", UserRole.tenant_admin, command(**overrides))


@pytest.mark.asyncio
async def test_create_invitation_issues_token(arranged_uow, email_sender):
    result = await invite(arranged_uow, email_sender)

    assert result.is_ok()
    response = result.value
    created = arranged_uow.invitations.create.await_args.args[0]

    # Only the hash is stored
    assert created.token_hash == hash_token(response.token)
    assert created.email == "bob@acme.com"
    assert created.status == InvitationStatus.pending
    assert created.invited_by_user_id == "owner-1"
    assert timedelta(days=6, hours=23) < created.expires_at - utcnow() <= timedelta(days=7)

    assert response.invitation.effective_status == InvitationStatus.pending
    assert "token_hash" not in response.invitation.model_dump()

    url = urlparse(response.invitation_url)
    assert url.path == "/accept-invite"
    assert parse_qs(url.query)["token"] == [response.token]

    assert response.email_sent is True
    to, template, data = email_sender.send.await_args.args
    assert to == "bob@acme.com"
    assert template == EmailTemplate.invitation
    assert data["organization_name"] == "Acme Corp"
    assert data["invitation_url"] == response.invitation_url

    audit_event = arranged_uow.audit_events.create.await_args.args[0]
    assert audit_event.action == "invitation_created"
    assert response.token not in str(audit_event.event_metadata)
    arranged_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_reinvite_reuses_row_with_new_token(arranged_uow, email_sender):
    existing = Invitation(
        id=uuid4(),
        tenant_id="acme",
        email="bob@acme.com",
        role=EmployeeRole.staff,
        status=InvitationStatus.pending,
        token_hash="old-hash",
        expires_at=utcnow() + timedelta(days=2),
    )
    arranged_uow.invitations.get_by_tenant_and_email.return_value = existing

    result = await invite(arranged_uow, email_sender, role=EmployeeRole.manager)

    assert result.is_ok()
    assert result.value.invitation.id == str(existing.id)
    assert result.value.invitation.role == EmployeeRole.manager
    assert existing.token_hash == hash_token(result.value.token)
    assert existing.token_hash != "old-hash"
    arranged_uow.invitations.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_reinvite_after_revoke_resets_to_pending(arranged_uow, email_sender):
    existing = Invitation(
        id=uuid4(),
        tenant_id="acme",
        email="bob@acme.com",
        status=InvitationStatus.revoked,
        token_hash="old-hash",
        expires_at=utcnow() - timedelta(days=1),
    )
    arranged_uow.invitations.get_by_tenant_and_email.return_value = existing

    result = await invite(arranged_uow, email_sender)

    assert result.is_ok()
    assert existing.status == InvitationStatus.pending
    assert existing.expires_at > utcnow()


@pytest.mark.asyncio
async def test_accepted_invitation_cannot_be_reissued(arranged_uow, email_sender):
    arranged_uow.invitations.get_by_tenant_and_email.return_value = Invitation(
        id=uuid4(),
        tenant_id="acme",
        email="bob@acme.com",
        status=InvitationStatus.accepted,
        token_hash="old-hash",
        expires_at=utcnow() + timedelta(days=1),
    )

    result = await invite(arranged_uow, email_sender)

    assert isinstance(result.error, ConflictError)
    assert result.error.code == "INVITATION_ALREADY_ACCEPTED"
    arranged_uow.commit.assert_not_awaited()
    email_sender.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_existing_member_cannot_be_invited(arranged_uow, email_sender):
    arranged_uow.users.get_by_email.return_value = User(id="user-bob", email="bob@acme.com")
    arranged_uow.employees.get_by_tenant_and_user.return_value = Employee(
        tenant_id="acme", user_id="user-bob"
    )

    result = await invite(arranged_uow, email_sender)

    assert result.error.code == "ALREADY_MEMBER"
    arranged_uow.invitations.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_pending_tenant_cannot_invite(arranged_uow, email_sender):
    arranged_uow.tenants.get_by_id.return_value = Tenant(id="acme", status=TenantStatus.pending)

    result = await invite(arranged_uow, email_sender)

    assert isinstance(result.error, ForbiddenError)
    assert result.error.code == "TENANT_NOT_ACTIVE"


@pytest.mark.asyncio
async def test_missing_tenant_is_not_found(arranged_uow, email_sender):
    arranged_uow.tenants.get_by_id.return_value = None

    result = await invite(arranged_uow, email_sender)

    assert result.error.code == "TENANT_NOT_FOUND"


@pytest.mark.asyncio
async def test_staff_cannot_invite(arranged_uow, email_sender):
    arranged_uow.employees.get_by_tenant_and_user.return_value = Employee(
        tenant_id="acme", user_id="user-1", role=EmployeeRole.staff
    )

    use_case = CreateInvitationUseCase(arranged_uow, email_sender, BASE_URL)
    result = await use_case.execute("user-1", "acme", UserRole.member, command())

    assert result.error.code == "ADMIN_ACCESS_REQUIRED"


@pytest.mark.asyncio
async def test_invalid_email_is_rejected(arranged_uow, email_sender):
    result = await invite(arranged_uow, email_sender, email="not-an-email")

    assert isinstance(result.error, ValidationError)
    arranged_uow.tenants.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_email_failure_does_not_fail_invitation(arranged_uow, email_sender):
    email_sender.send.side_effect = RuntimeError("SMTP unavailable")

    result = await invite(arranged_uow, email_sender)

    assert result.is_ok()
    assert result.value.email_sent is False
    arranged_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_custom_ttl_is_applied(arranged_uow, email_sender):
    use_case = CreateInvitationUseCase(
        arranged_uow, email_sender, BASE_URL, invitation_ttl=timedelta(days=1)
    )

    result = await use_case.execute("owner-1", "acme", UserRole.tenant_admin, command())

    assert result.value.invitation.expires_at - utcnow() <= timedelta(days=1)


@pytest.mark.asyncio
async def test_reinvite_loses_to_concurrent_accept(arranged_uow, email_sender):
    arranged_uow.invitations.get_by_tenant_and_email.return_value = Invitation(
        id=uuid4(),
        tenant_id="acme",
        email="bob@acme.com",
        status=InvitationStatus.pending,
        token_hash="old-hash",
        expires_at=utcnow() + timedelta(days=1),
    )
    arranged_uow.invitations.reissue.side_effect = None
    arranged_uow.invitations.reissue.return_value = None

    result = await invite(arranged_uow, email_sender)

    assert result.error.code == "INVITATION_ALREADY_ACCEPTED"
    arranged_uow.audit_events.create.assert_not_awaited()
    arranged_uow.commit.assert_not_awaited()
    email_sender.send.assert_not_awaited()
