"""
Bootstrap Platform Admin Use Case

Creates (or promotes) the first SUPER_ADMIN from configured credentials.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from src.app.errors import ConflictError, NotFoundError, ValidationError
from src.app.services.auth_provider import IAuthProvider, discard_identity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.dtos import UserView
from src.domain.base import normalize_email
from src.domain.entities import AuditEvent, UserRole

logger = logging.getLogger(__name__)


class BootstrapPlatformAdminUseCase:
    """
    Business Rules:
    - Refused once any SUPER_ADMIN exists
    - An existing account with the email is promoted instead of re-created
    - A newly signed-up identity is deleted again if promotion fails
    """

    def __init__(self, uow: UnitOfWork, auth_provider: IAuthProvider):
        self.uow = uow
        self.auth_provider = auth_provider

    async def execute(
        self, email: Optional[str], password: Optional[str], name: Optional[str] = None
    ) -> Result[UserView]:
        email = normalize_email(email)
        if not email or not password:
            return Return.err(
                ValidationError(
                    "ADMIN_CREDENTIALS_NOT_CONFIGURED",
                    "Platform admin email and password are not configured",
                )
            )

        async with self.uow:
            if await self.uow.users.exists_with_role(UserRole.super_admin):
                return Return.err(
                    ConflictError("SUPER_ADMIN_EXISTS", "A platform administrator already exists")
                )
            existing = await self.uow.users.get_by_email(email)

        created_user_id = None
        if existing is not None:
            user_id = existing.id
        else:
            identity = await self.auth_provider.sign_up_with_password(email, password, name)
            user_id = created_user_id = identity.user_id

        try:
            result = await self._promote(user_id)
        except Exception:
            if created_user_id:
                await discard_identity(self.auth_provider, created_user_id)
            raise

        if result.is_err() and created_user_id:
            await discard_identity(self.auth_provider, created_user_id)
        if result.is_ok():
            logger.info(f"Platform administrator {email} bootstrapped")
        return result

    async def _promote(self, user_id: str) -> Result[UserView]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(NotFoundError("USER_NOT_FOUND", "User not found"))

            user.role = UserRole.super_admin
            user = await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(user_id=user.id, action="platform_admin_bootstrapped")
            )

            await self.uow.commit()

            return Return.ok(UserView.model_validate(user))
