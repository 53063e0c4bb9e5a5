from fastapi import APIRouter, Depends, status

from src.api.envelope import ApiResponse, ok
from src.api.error import raise_for_error
from src.app.services.auth_provider import IAuthProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import BootstrapPlatformAdminUseCase
from src.app.use_cases.users import UserView
from src.depends import get_auth_provider, get_config, get_unit_of_work

router = APIRouter(prefix="/setup", tags=["Setup"])


@router.post(
    "/admin", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[UserView]
)
async def bootstrap_admin(
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
    config=Depends(get_config),
):
    """
    Create the first platform super admin from ADMIN_EMAIL / ADMIN_PASSWORD.

    Raises:
        - 400 Bad Request: ADMIN_CREDENTIALS_NOT_CONFIGURED
        - 409 Conflict: SUPER_ADMIN_EXISTS
    """
    use_case = BootstrapPlatformAdminUseCase(uow, auth_provider)
    result = await use_case.execute(
        config.ADMIN_EMAIL, config.ADMIN_PASSWORD, config.ADMIN_NAME
    )

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Platform admin created")
