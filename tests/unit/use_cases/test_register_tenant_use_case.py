import pytest

from src.app.errors import ConflictError, DependencyError, OperationError, ValidationError
from src.app.services.auth_provider import AuthIdentity
from src.app.services.email_sender import EmailTemplate
from src.app.use_cases.tenants import (
    OrganizationInput,
    OwnerInput,
    RegisterTenantCommand,
    RegisterTenantUseCase,
)
from src.domain.entities import (
    EmployeeRole,
    Tenant,
    TenantStatus,
    User,
    UserRole,
)


def command(**overrides) -> RegisterTenantCommand:
    data = dict(
        tenant_id="acme",
        organization=OrganizationInput(name=" Acme Corp "),
        owner=OwnerInput(email="Owner@Acme.com", name="Alice Owner", password="OwnerPass123!"),
    )
    data.update(overrides)
    return RegisterTenantCommand(**data)


@pytest.fixture
def arranged_uow(mock_uow):
    """Free tenant id, owner has no account yet"""
    mock_uow.tenants.get_by_id.return_value = None
    mock_uow.users.get_by_email.return_value = None
    mock_uow.tenants.create.side_effect = lambda tenant: tenant
    mock_uow.organizations.create.side_effect = lambda organization: organization
    mock_uow.employees.create.side_effect = lambda employee: employee
    mock_uow.users.update.side_effect = lambda user: user
    mock_uow.users.get_by_id.return_value = User(
        id="u1", email="owner@acme.com", name="Alice Owner"
    )
    return mock_uow


@pytest.fixture
def signup_owner(auth_provider):
    auth_provider.sign_up_with_password.return_value = AuthIdentity(
        user_id="u1", email="owner@acme.com", name="Alice Owner"
    )
    return auth_provider


@pytest.mark.asyncio
async def test_register_creates_pending_tenant_with_owner(
    arranged_uow, signup_owner, email_sender
):
    use_case = RegisterTenantUseCase(arranged_uow, signup_owner, email_sender)
    result = await use_case.execute(command())

    assert result.is_ok()
    tenant = result.value.tenant
    assert tenant.id == "acme"
    assert tenant.status == TenantStatus.pending
    assert tenant.moderation_log == []
    assert tenant.owner_id == "u1"
    assert tenant.organization.name == "Acme Corp"

    owner = result.value.owner
    assert owner.user_id == "u1"
    assert owner.role == EmployeeRole.admin

    signup_owner.sign_up_with_password.assert_awaited_once_with(
        "owner@acme.com", "OwnerPass123!", "Alice Owner"
    )
    updated_user = arranged_uow.users.update.await_args.args[0]
    assert updated_user.tenant_id == "acme"
    assert updated_user.role == UserRole.tenant_admin

    assert arranged_uow.audit_events.create.await_args.args[0].action == "tenant_registered"
    arranged_uow.commit.assert_awaited_once()

    to, template, _ = email_sender.send.await_args.args
    assert to == "owner@acme.com"
    assert template == EmailTemplate.tenant_registered


@pytest.mark.asyncio
async def test_register_without_owner(arranged_uow, auth_provider, email_sender):
    use_case = RegisterTenantUseCase(arranged_uow, auth_provider, email_sender)
    result = await use_case.execute(command(owner=None, created_by="admin-1"))

    assert result.is_ok()
    assert result.value.owner is None
    assert result.value.tenant.created_by == "admin-1"
    auth_provider.sign_up_with_password.assert_not_awaited()
    arranged_uow.employees.create.assert_not_awaited()
    email_sender.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_existing_owner_account_is_reused(arranged_uow, auth_provider, email_sender):
    arranged_uow.users.get_by_email.return_value = User(id="u1", email="owner@acme.com")

    use_case = RegisterTenantUseCase(arranged_uow, auth_provider, email_sender)
    result = await use_case.execute(
        command(owner=OwnerInput(email="owner@acme.com"))
    )

    assert result.is_ok()
    auth_provider.sign_up_with_password.assert_not_awaited()


@pytest.mark.asyncio
async def test_owner_already_in_tenant_is_a_conflict(arranged_uow, auth_provider, email_sender):
    arranged_uow.users.get_by_email.return_value = User(
        id="u1", email="owner@acme.com", tenant_id="globex"
    )

    use_case = RegisterTenantUseCase(arranged_uow, auth_provider, email_sender)
    result = await use_case.execute(command())

    assert result.error.code == "OWNER_ALREADY_IN_TENANT"
    arranged_uow.tenants.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_taken_tenant_id_never_reaches_auth_provider(
    arranged_uow, auth_provider, email_sender
):
    arranged_uow.tenants.get_by_id.return_value = Tenant(id="acme", deleted=True)

    use_case = RegisterTenantUseCase(arranged_uow, auth_provider, email_sender)
    result = await use_case.execute(command())

    assert isinstance(result.error, ConflictError)
    assert result.error.code == "TENANT_ALREADY_EXISTS"
    arranged_uow.tenants.get_by_id.assert_awaited_once_with("acme", include_deleted=True)
    auth_provider.sign_up_with_password.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("tenant_id", ["a", "Acme Corp", "-acme", "acme_corp", "x" * 64])
async def test_invalid_tenant_id(arranged_uow, auth_provider, email_sender, tenant_id):
    use_case = RegisterTenantUseCase(arranged_uow, auth_provider, email_sender)
    result = await use_case.execute(command(tenant_id=tenant_id))

    assert isinstance(result.error, ValidationError)
    assert result.error.code == "INVALID_TENANT_ID"
    arranged_uow.tenants.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_new_owner_needs_password(arranged_uow, auth_provider, email_sender):
    use_case = RegisterTenantUseCase(arranged_uow, auth_provider, email_sender)
    result = await use_case.execute(command(owner=OwnerInput(email="owner@acme.com")))

    assert result.error.code == "OWNER_PASSWORD_REQUIRED"


@pytest.mark.asyncio
async def test_signed_up_owner_is_removed_when_store_fails(
    arranged_uow, signup_owner, email_sender
):
    arranged_uow.tenants.create.side_effect = OperationError(
        DependencyError("STORE_UNAVAILABLE", "Data store operation failed")
    )

    use_case = RegisterTenantUseCase(arranged_uow, signup_owner, email_sender)
    with pytest.raises(OperationError):
        await use_case.execute(command())

    signup_owner.delete_user.assert_awaited_once_with("u1")
    arranged_uow.commit.assert_not_awaited()
    email_sender.send.assert_not_awaited()
