from datetime import timedelta
from unittest.mock import ANY
from uuid import uuid4

import pytest

from src.app.errors import InvitationInvalidError
from src.app.use_cases.invitations import (
    ResendInvitationUseCase,
    RevokeInvitationUseCase,
    UpdateInvitationRoleUseCase,
    ValidateInvitationTokenUseCase,
)
from src.domain.base import utcnow
from src.domain.entities import EmployeeRole, Invitation, InvitationStatus, UserRole
from src.domain.tokens import hash_token

BASE_URL = "https://pm.example.com"


def make_invitation(**overrides) -> Invitation:
    data = dict(
        id=uuid4(),
        tenant_id="acme",
        email="bob@acme.com",
        role=EmployeeRole.staff,
        status=InvitationStatus.pending,
        token_hash="old-hash",
        expires_at=utcnow() + timedelta(days=3),
    )
    data.update(overrides)
    return Invitation(**data)


@pytest.fixture
def arranged_uow(mock_uow):
    def stored():
        return mock_uow.invitations.get_for_tenant.return_value

    def revoke(tenant_id, invitation_id, at):
        stored().status = InvitationStatus.revoked
        return stored()

    def rotate_token(tenant_id, invitation_id, token_hash, expires_at, at):
        stored().token_hash = token_hash
        stored().expires_at = expires_at
        return stored()

    def update_role(tenant_id, invitation_id, role, at):
        stored().role = role
        return stored()

    mock_uow.invitations.revoke.side_effect = revoke
    mock_uow.invitations.rotate_token.side_effect = rotate_token
    mock_uow.invitations.update_role.side_effect = update_role
    mock_uow.organizations.get_by_tenant_id.return_value = None
    mock_uow.users.get_by_id.return_value = None
    return mock_uow


# ============================================================================
# Resend Invitation Tests
# ============================================================================


@pytest.mark.asyncio
async def test_resend_expired_invitation_rotates_token(arranged_uow, email_sender):
    invitation = make_invitation(expires_at=utcnow() - timedelta(hours=1))
    arranged_uow.invitations.get_for_tenant.return_value = invitation

    use_case = ResendInvitationUseCase(arranged_uow, email_sender, BASE_URL)
    result = await use_case.execute("owner-1", "acme", UserRole.tenant_admin, invitation.id)

    assert result.is_ok()
    assert invitation.token_hash == hash_token(result.value.token)
    assert invitation.expires_at > utcnow() + timedelta(days=6)
    assert result.value.invitation.effective_status == InvitationStatus.pending
    assert result.value.email_sent is True

    audit_event = arranged_uow.audit_events.create.await_args.args[0]
    assert audit_event.action == "invitation_resent"
    assert audit_event.event_metadata["previous_status"] == "EXPIRED"
    arranged_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [InvitationStatus.revoked, InvitationStatus.accepted])
async def test_resend_rejects_terminal_invitations(arranged_uow, email_sender, status):
    invitation = make_invitation(status=status)
    arranged_uow.invitations.get_for_tenant.return_value = invitation

    use_case = ResendInvitationUseCase(arranged_uow, email_sender, BASE_URL)
    result = await use_case.execute("owner-1", "acme", UserRole.tenant_admin, invitation.id)

    assert isinstance(result.error, InvitationInvalidError)
    assert result.error.code == f"INVITATION_{status.value}"
    assert invitation.token_hash == "old-hash"
    arranged_uow.invitations.rotate_token.assert_not_awaited()
    email_sender.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_resend_of_other_tenants_invitation_is_not_found(arranged_uow, email_sender):
    arranged_uow.invitations.get_for_tenant.return_value = None

    use_case = ResendInvitationUseCase(arranged_uow, email_sender, BASE_URL)
    result = await use_case.execute("owner-1", "acme", UserRole.tenant_admin, uuid4())

    assert result.error.code == "INVITATION_NOT_FOUND"


# ============================================================================
# Revoke Invitation Tests
# ============================================================================


@pytest.mark.asyncio
async def test_revoke_pending_invitation(arranged_uow):
    invitation = make_invitation()
    arranged_uow.invitations.get_for_tenant.return_value = invitation

    result = await RevokeInvitationUseCase(arranged_uow).execute(
        "owner-1", "acme", UserRole.tenant_admin, invitation.id
    )

    assert result.is_ok()
    assert result.value.status == InvitationStatus.revoked
    assert result.value.effective_status == InvitationStatus.revoked
    arranged_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_revoke_expired_invitation_is_allowed(arranged_uow):
    invitation = make_invitation(expires_at=utcnow() - timedelta(days=1))
    arranged_uow.invitations.get_for_tenant.return_value = invitation

    result = await RevokeInvitationUseCase(arranged_uow).execute(
        "owner-1", "acme", UserRole.tenant_admin, invitation.id
    )

    assert result.is_ok()
    assert invitation.status == InvitationStatus.revoked


@pytest.mark.asyncio
async def test_revoke_accepted_invitation_fails(arranged_uow):
    invitation = make_invitation(status=InvitationStatus.accepted)
    arranged_uow.invitations.get_for_tenant.return_value = invitation

    result = await RevokeInvitationUseCase(arranged_uow).execute(
        "owner-1", "acme", UserRole.tenant_admin, invitation.id
    )

    assert result.error.code == "INVITATION_ACCEPTED"
    arranged_uow.invitations.revoke.assert_not_awaited()


# ============================================================================
# Update Role / Validate Tests
# ============================================================================


@pytest.mark.asyncio
async def test_update_role_keeps_token(arranged_uow):
    invitation = make_invitation()
    arranged_uow.invitations.get_for_tenant.return_value = invitation

    result = await UpdateInvitationRoleUseCase(arranged_uow).execute(
        "owner-1", "acme", UserRole.tenant_admin, invitation.id, EmployeeRole.manager
    )

    assert result.is_ok()
    assert result.value.role == EmployeeRole.manager
    assert invitation.token_hash == "old-hash"
    audit_event = arranged_uow.audit_events.create.await_args.args[0]
    assert audit_event.event_metadata == {
        "invitation_id": str(invitation.id),
        "from": "STAFF",
        "to": "MANAGER",
    }


@pytest.mark.asyncio
async def test_validate_reports_reason(mock_uow):
    mock_uow.invitations.get_by_token_hash.return_value = make_invitation(
        status=InvitationStatus.revoked
    )

    result = await ValidateInvitationTokenUseCase(mock_uow).execute("some-token")

    assert result.is_ok()
    assert result.value.valid is False
    assert result.value.reason == "REVOKED"


@pytest.mark.asyncio
async def test_validate_unknown_token(mock_uow):
    mock_uow.invitations.get_by_token_hash.return_value = None

    result = await ValidateInvitationTokenUseCase(mock_uow).execute("some-token")

    assert result.value.valid is False
    assert result.value.reason == "NOT_FOUND"
    assert result.value.invitation is None


# ============================================================================
# Accept Committed Between Read And Write
# ============================================================================


def accepted_meanwhile(arranged_uow, invitation, operation: str):
    """Row reads PENDING, but the conditional write finds it ACCEPTED."""
    repository_method = getattr(arranged_uow.invitations, operation)
    repository_method.side_effect = None
    repository_method.return_value = None
    arranged_uow.invitations.get_by_id.return_value = make_invitation(
        id=invitation.id, status=InvitationStatus.accepted, accepted_at=utcnow()
    )


@pytest.mark.asyncio
async def test_revoke_loses_to_concurrent_accept(arranged_uow):
    invitation = make_invitation()
    arranged_uow.invitations.get_for_tenant.return_value = invitation
    accepted_meanwhile(arranged_uow, invitation, "revoke")

    result = await RevokeInvitationUseCase(arranged_uow).execute(
        "owner-1", "acme", UserRole.tenant_admin, invitation.id
    )

    assert result.error.code == "INVITATION_ACCEPTED"
    arranged_uow.invitations.revoke.assert_awaited_once_with("acme", invitation.id, ANY)
    arranged_uow.audit_events.create.assert_not_awaited()
    arranged_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_resend_loses_to_concurrent_accept(arranged_uow, email_sender):
    invitation = make_invitation()
    arranged_uow.invitations.get_for_tenant.return_value = invitation
    accepted_meanwhile(arranged_uow, invitation, "rotate_token")

    use_case = ResendInvitationUseCase(arranged_uow, email_sender, BASE_URL)
    result = await use_case.execute("owner-1", "acme", UserRole.tenant_admin, invitation.id)

    assert result.error.code == "INVITATION_ACCEPTED"
    arranged_uow.commit.assert_not_awaited()
    email_sender.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_role_loses_to_concurrent_accept(arranged_uow):
    invitation = make_invitation()
    arranged_uow.invitations.get_for_tenant.return_value = invitation
    accepted_meanwhile(arranged_uow, invitation, "update_role")

    result = await UpdateInvitationRoleUseCase(arranged_uow).execute(
        "owner-1", "acme", UserRole.tenant_admin, invitation.id, EmployeeRole.admin
    )

    assert result.error.code == "INVITATION_ACCEPTED"
    arranged_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_validate_hides_invitations_of_deleted_tenants(mock_uow):
    mock_uow.invitations.get_by_token_hash.return_value = make_invitation()
    mock_uow.tenants.get_by_id.return_value = None

    result = await ValidateInvitationTokenUseCase(mock_uow).execute("some-token")

    assert result.value.valid is False
    assert result.value.reason == "NOT_FOUND"
    mock_uow.tenants.get_by_id.assert_awaited_once_with("acme")
