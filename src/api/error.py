from fastapi import status
from libs.result import Error
from src.app.errors import ErrorKind, kind_of, status_code_for


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Raise the API exception matching an error's kind."""
    if kind_of(error) == ErrorKind.dependency:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code_for(error))
