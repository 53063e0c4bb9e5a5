from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, raise_for_error
from src.app.errors import UnauthenticatedError
from src.app.services.auth_provider import AuthIdentity, IAuthProvider
from src.app.services.email_sender import IEmailSender
from src.app.use_cases.users import Actor, LoadActorUseCase

security = HTTPBearer(auto_error=False)


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_provider(request: Request) -> IAuthProvider:
    return request.app.state.auth_provider


def get_email_sender(request: Request) -> IEmailSender:
    return request.app.state.email_sender


def get_config(request: Request):
    return request.app.state.config


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> Optional[AuthIdentity]:
    """
    Resolve the bearer session, if one was sent.

    Raises:
        ClientError: 401 if a token was sent but is invalid or expired
    """
    if credentials is None:
        return None

    identity = await auth_provider.verify_session(credentials.credentials)
    if identity is None:
        raise ClientError(
            UnauthenticatedError("INVALID_SESSION", "Invalid or expired session"),
            status_code=401,
        )
    return identity


async def get_current_identity(
    identity: Optional[AuthIdentity] = Depends(get_optional_identity),
) -> AuthIdentity:
    if identity is None:
        raise ClientError(
            UnauthenticatedError("AUTHENTICATION_REQUIRED", "Authentication required"),
            status_code=401,
        )
    return identity


async def get_current_actor(
    identity: AuthIdentity = Depends(get_current_identity),
    uow=Depends(get_unit_of_work),
) -> Actor:
    """
    Dependency resolving the caller's platform role and tenant binding.

    Raises:
        ClientError: 401 if the session user no longer exists
    """
    result = await LoadActorUseCase(uow).execute(identity)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
