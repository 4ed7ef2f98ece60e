"""Typed service errors.

Services raise these; since they are ``HTTPException`` subclasses FastAPI
renders them as ``{"detail": ...}`` with the matching status code.
"""
from fastapi import HTTPException, status


class ServiceError(HTTPException):
    """Base class for errors raised by the service layer."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class NotFoundError(ServiceError):
    """Attempt, puzzle, user or profile does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class AlreadyCompletedError(ServiceError):
    """Attempt state transition not allowed because it is already completed."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Attempt already completed"


class ValidationError(ServiceError):
    """Malformed input, e.g. negative completion time."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"
