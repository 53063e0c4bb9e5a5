import pytest

from src.app.errors import ForbiddenError
from src.app.services.authorization import check_platform_admin, check_tenant_admin
from src.domain.entities import Employee, EmployeeRole, UserRole


@pytest.mark.asyncio
async def test_tenant_admin_role_short_circuits(mock_uow):
    denied = await check_tenant_admin(mock_uow, "user-1", "acme", UserRole.tenant_admin)

    assert denied is None
    mock_uow.employees.get_by_tenant_and_user.assert_not_awaited()


@pytest.mark.asyncio
async def test_admin_employee_is_allowed(mock_uow):
    mock_uow.employees.get_by_tenant_and_user.return_value = Employee(
        tenant_id="acme", user_id="user-1", role=EmployeeRole.admin
    )

    assert await check_tenant_admin(mock_uow, "user-1", "acme") is None
    mock_uow.employees.get_by_tenant_and_user.assert_awaited_once_with("acme", "user-1")


@pytest.mark.asyncio
async def test_non_employee_needs_tenant_access(mock_uow):
    mock_uow.employees.get_by_tenant_and_user.return_value = None

    denied = await check_tenant_admin(mock_uow, "user-1", "acme", UserRole.member)

    assert isinstance(denied, ForbiddenError)
    assert denied.code == "TENANT_ACCESS_REQUIRED"


@pytest.mark.asyncio
async def test_staff_employee_needs_admin_role(mock_uow):
    mock_uow.employees.get_by_tenant_and_user.return_value = Employee(
        tenant_id="acme", user_id="user-1", role=EmployeeRole.staff
    )

    denied = await check_tenant_admin(mock_uow, "user-1", "acme", UserRole.member)

    assert isinstance(denied, ForbiddenError)
    assert denied.code == "ADMIN_ACCESS_REQUIRED"


@pytest.mark.asyncio
async def test_platform_admin_role_does_not_grant_tenant_admin(mock_uow):
    mock_uow.employees.get_by_tenant_and_user.return_value = None

    denied = await check_tenant_admin(mock_uow, "admin-1", "acme", UserRole.super_admin)

    assert denied.code == "TENANT_ACCESS_REQUIRED"


@pytest.mark.parametrize("role", [UserRole.super_admin, UserRole.admin])
def test_platform_admins_pass_platform_check(role):
    assert check_platform_admin(role) is None


@pytest.mark.parametrize("role", [UserRole.tenant_admin, UserRole.member, None])
def test_other_roles_fail_platform_check(role):
    denied = check_platform_admin(role)
    assert isinstance(denied, ForbiddenError)
    assert denied.code == "PLATFORM_ADMIN_REQUIRED"
