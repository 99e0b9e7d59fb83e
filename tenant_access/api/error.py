from fastapi import status

from tenant_access.app.errors import ErrorKind, kind_of
from tenant_access.libs.result import Error

KIND_STATUS = {
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.forbidden: status.HTTP_403_FORBIDDEN,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
    ErrorKind.expired: status.HTTP_410_GONE,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(
        self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Raise the HTTP error matching the kind of a core error"""
    try:
        kind = kind_of(error)
    except ValueError:
        raise ServerError(error)

    if kind == ErrorKind.storage_unavailable:
        raise ServerError(error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    raise ClientError(error, status_code=KIND_STATUS[kind])
