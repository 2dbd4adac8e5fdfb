"""Exception types raised by services and normalized at the action boundary."""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a failed operation, used to pick an HTTP status."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    PROVIDER = "provider"
    UNAVAILABLE = "unavailable"
    UNEXPECTED = "unexpected"


class TodoDashError(Exception):
    """Base class for expected, user-presentable failures."""

    kind = ErrorKind.UNEXPECTED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TodoDashError):
    """Input rejected before touching the store or any provider."""

    kind = ErrorKind.VALIDATION


class NotFoundError(TodoDashError):
    """Owned row does not exist."""

    kind = ErrorKind.NOT_FOUND


class AuthError(TodoDashError):
    """Missing or invalid session."""

    kind = ErrorKind.UNAUTHORIZED


class ProviderError(TodoDashError):
    """An external collaborator answered with an error."""

    kind = ErrorKind.PROVIDER


class ProviderUnavailableError(ProviderError):
    """An external collaborator could not be reached."""

    kind = ErrorKind.UNAVAILABLE
