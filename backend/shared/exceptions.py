"""
Base exception classes for the wallet-users backend.

Each module should define its own exceptions that inherit from these bases.
Every error carries a stable machine-readable slug and a category; callers
key off the slug, never the human-readable message.
"""

from enum import Enum
from typing import Optional, Any


class ErrorCategory(str, Enum):
    """Coarse error classes that callers map to their own responses."""

    UNKNOWN = "unknown"
    AUTHORIZATION = "authorization"
    INCORRECT_INPUT = "incorrect-input"
    NOT_FOUND = "not-found"


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions should inherit from this class.
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        slug: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.slug = slug or "unknown-error"
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "slug": self.slug,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


class AuthorizationError(AppError):
    """Bad credentials, invalid/expired/revoked token, or signing failure."""

    category = ErrorCategory.AUTHORIZATION


class IncorrectInputError(AppError):
    """Input validation failed."""

    category = ErrorCategory.INCORRECT_INPUT


class NotFoundError(AppError):
    """Resource not found."""

    category = ErrorCategory.NOT_FOUND

    def __init__(
        self,
        message: str = "Not found",
        slug: Optional[str] = "not-found",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, slug, details)
