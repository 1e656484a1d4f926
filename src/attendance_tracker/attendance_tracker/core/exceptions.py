from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    `payload` carries extra JSON fields returned next to the error message.
    """

    status_code = 400

    def __init__(self, message: str, *, payload: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.payload = dict(payload or {})


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when credentials are invalid or no session exists."""

    status_code = 401


class ConflictError(DomainError):
    """Raised when a unique field is taken or attendance is already marked."""

    status_code = 400


class NotFoundError(DomainError):
    """Raised when no row matches (including rows owned by another admin)."""

    status_code = 404
