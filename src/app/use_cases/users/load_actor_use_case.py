"""
Load Actor Use Case

Turns an auth-provider identity into the caller context use cases need.
"""

from libs.result import Result, Return
from src.app.errors import UnauthenticatedError
from src.app.services.auth_provider import AuthIdentity
from src.app.services.unit_of_work import UnitOfWork

from .dtos import Actor


class LoadActorUseCase:
    """
    Use case for loading the current caller.

    Business Rules:
    - The identity's user must still exist
    - Role and tenant binding come from the users table, not the session
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: AuthIdentity) -> Result[Actor]:
        async with self.uow:
            user = await self.uow.users.get_by_id(identity.user_id)
            if user is None:
                return Return.err(
                    UnauthenticatedError("USER_NOT_FOUND", "Session user no longer exists")
                )

            return Return.ok(
                Actor(
                    user_id=user.id,
                    email=user.email,
                    name=user.name,
                    role=user.role,
                    tenant_id=user.tenant_id,
                )
            )
