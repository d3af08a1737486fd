"""Tagged service errors and their HTTP status mapping."""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus


class ErrorKind(str, Enum):
    """Failure categories a service function can report."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


HTTP_STATUS: dict[ErrorKind, HTTPStatus] = {
    ErrorKind.BAD_REQUEST: HTTPStatus.BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ErrorKind.FORBIDDEN: HTTPStatus.FORBIDDEN,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.CONFLICT: HTTPStatus.CONFLICT,
}


class ServiceError(Exception):
    """Base error raised by the service layer.

    Subclasses pin ``kind``; the application error handler turns the kind
    into a status code through ``HTTP_STATUS``.
    """

    kind: ErrorKind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    @property
    def status_code(self) -> int:
        return int(HTTP_STATUS[self.kind])

    def to_dict(self) -> dict:
        return {"message": self.message, "error": self.kind.value}


class InvalidRequestError(ServiceError):
    kind = ErrorKind.BAD_REQUEST


class PermissionDeniedError(ServiceError):
    kind = ErrorKind.FORBIDDEN


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT
