"""Application error types mapped to HTTP status codes by the exception handler in app.main."""

from fastapi import status


class AppError(Exception):
    """Base error carrying a client-facing message and an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Malformed identifier or invalid field value."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidArgumentError(ValidationError):
    """Unsupported option value, e.g. an unknown export format."""


class AuthenticationError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(AppError):
    """Authenticated caller lacks the required capability."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Write would violate a uniqueness constraint."""

    status_code = status.HTTP_409_CONFLICT


class RenderError(AppError):
    """PDF or spreadsheet renderer failed."""


class ConfigurationError(AppError):
    """Server misconfiguration detected at startup."""
