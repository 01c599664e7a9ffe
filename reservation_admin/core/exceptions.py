"""Exception hierarchy shared by the HTTP client, services and mutations."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for client-side failures."""


class ValidationError(DomainError):
    """Raised when a precondition fails before any request is sent."""


class InfrastructureError(DomainError):
    """Raised when the backend cannot be reached at all."""


class ApiError(DomainError):
    """Raised for every non-2xx response from the backend."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, status={self.status})"
