"""
Application exceptions.

Every error the API reports on purpose derives from :class:`AppError` and
carries the HTTP status it maps to.  The handlers installed by the app
factory render them with the standard error envelope.
"""

from __future__ import annotations

from typing import Any, Optional


class AppError(Exception):
    """Base exception for all sample-backend errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    status_code = 404


class ConflictError(AppError):
    """Raised when a write would violate a uniqueness constraint."""

    status_code = 409


class ValidationError(AppError):
    """Request data that passed schema parsing but is still unacceptable."""

    status_code = 422


class ConfigurationError(AppError):
    """Raised when there are configuration issues."""

    pass
