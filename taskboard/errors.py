"""
Domain errors raised by the store clients and the services.

Each error carries the HTTP status it maps to; the handlers registered in
taskboard.main turn them into {"error": message} JSON responses.
"""

from fastapi import status


class TaskboardError(Exception):
    """Base class for all errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(TaskboardError):
    """Duplicate e-mail on signup. Reported as 400 like the original auth service."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED


class StoreError(TaskboardError):
    """
    Backing-store failure. The message is logged, never returned to the client.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def require(**fields: object) -> None:
    """Raise ValidationError naming every field that is missing or empty."""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required.")
