"""
Auth provider port.

The auth provider owns credentials and sessions. It does not share a
transaction with the unit of work, so anything it creates during a failed
use case has to be removed again through ``delete_user``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class AuthIdentity(BaseModel):
    """Identity resolved by the auth provider"""

    user_id: str
    email: str
    name: Optional[str] = None


class IAuthProvider(ABC):
    @abstractmethod
    async def sign_up_with_password(
        self, email: str, password: str, name: Optional[str] = None
    ) -> AuthIdentity:
        """
        Create a credential identity.

        Raises:
            OperationError: ConflictError if the email is taken,
                ValidationError for a weak password, DependencyError otherwise
        """
        pass

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> Optional[str]:
        """Return a session token, or None for bad credentials"""
        pass

    @abstractmethod
    async def verify_session(self, token: str) -> Optional[AuthIdentity]:
        """Resolve a session token to an identity, or None"""
        pass

    @abstractmethod
    async def delete_user(self, user_id: str) -> None:
        """Remove an identity created by sign_up_with_password"""
        pass


async def discard_identity(auth_provider: IAuthProvider, user_id: str) -> None:
    """
    Compensating cleanup for an identity created by a use case that then failed.

    Failures are logged and never raised, so the caller's original error wins.
    """
    try:
        await auth_provider.delete_user(user_id)
        logger.info(f"Rolled back auth identity {user_id}")
    except Exception:
        logger.error(f"Failed to roll back auth identity {user_id}", exc_info=True)
