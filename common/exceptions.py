from enum import Enum
from http import HTTPStatus


class ErrorKind(Enum):
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    STORE_FAILURE = "STORE_FAILURE"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def is_failure(self) -> bool:
        return self in (ErrorKind.UPSTREAM_FAILURE, ErrorKind.STORE_FAILURE)


_STATUS_CODES = {
    ErrorKind.VALIDATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.UPSTREAM_FAILURE: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorKind.STORE_FAILURE: HTTPStatus.INTERNAL_SERVER_ERROR,
}


class ApiError(Exception):
    """
    Error raised by the services and turned into a JSON response at the
    route boundary.

    For VALIDATION and NOT_FOUND the message is shown to the caller. For the
    failure kinds it is only logged; the caller gets the route's generic
    failure message.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code
