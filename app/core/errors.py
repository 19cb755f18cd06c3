"""Service-level errors. Services raise these; the API maps each to its HTTP status."""

from starlette import status


class ServiceError(Exception):
    """Base class for expected, caller-visible failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(ServiceError):
    """Raised when a required field is missing or a value is not acceptable."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidCredentialsError(ServiceError):
    """Raised when a username/password pair (or current password) does not verify."""

    status_code = status.HTTP_401_UNAUTHORIZED


class UnauthenticatedError(ServiceError):
    """Raised when a bearer token is missing, malformed, tampered with or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ServiceError):
    """Raised when the caller's role or ownership does not permit the operation."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    """Raised when an archive, user or stored file does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """Raised when a username is already held by another user. Reported as 400."""


class InvalidOperationError(ServiceError):
    """Raised for requests that are well-formed but not allowed (e.g. deleting yourself)."""
