"""
Error taxonomy.

Every failure a caller can observe is one of these kinds. Use cases return
them through ``Return.err``; adapters raise them wrapped in ``OperationError``.
"""

from enum import Enum
from typing import Optional

from libs.result import Error
from src.domain.entities import InvitationStatus


class ErrorKind(str, Enum):
    validation = "ValidationError"
    unauthenticated = "UnauthenticatedError"
    forbidden = "ForbiddenError"
    not_found = "NotFoundError"
    conflict = "ConflictError"
    dependency = "DependencyError"


STATUS_CODES = {
    ErrorKind.validation: 400,
    ErrorKind.unauthenticated: 401,
    ErrorKind.forbidden: 403,
    ErrorKind.not_found: 404,
    ErrorKind.conflict: 409,
    ErrorKind.dependency: 500,
}


class ValidationError(Error):
    kind = ErrorKind.validation


class UnauthenticatedError(Error):
    kind = ErrorKind.unauthenticated


class ForbiddenError(Error):
    kind = ErrorKind.forbidden


class NotFoundError(Error):
    kind = ErrorKind.not_found


class ConflictError(Error):
    kind = ErrorKind.conflict


class DependencyError(Error):
    kind = ErrorKind.dependency


class InvitationInvalidError(ConflictError):
    """Invitation can no longer be used; carries its effective status."""

    def __init__(self, status: InvitationStatus, message: Optional[str] = None):
        self.effective_status = status
        super().__init__(
            f"INVITATION_{status.value}",
            message or f"Invitation is {status.value.lower()}",
            reason=status.value,
        )


def kind_of(error: Error) -> ErrorKind:
    return getattr(error, "kind", ErrorKind.dependency)


def status_code_for(error: Error) -> int:
    return STATUS_CODES[kind_of(error)]


class OperationError(Exception):
    """Raised by stores and collaborators with an already-classified error."""

    def __init__(self, error: Error):
        self.error = error
        super().__init__(error.message)
