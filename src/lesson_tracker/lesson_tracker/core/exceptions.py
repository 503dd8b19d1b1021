from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for front-end rule violations and upstream failures."""


class ValidationError(DomainError):
    """Raised when user input is rejected before any request is sent."""


class ApiError(DomainError):
    """Raised when the remote API answers with a non-success status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(ApiError):
    """404 from the API. Callers that treat "missing" as "create new" catch this."""


class ApiUnavailableError(ApiError):
    """Raised when the API cannot be reached at all (offline, DNS, timeout)."""
