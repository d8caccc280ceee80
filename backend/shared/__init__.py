"""
Shared infrastructure for the wallet-users backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: PostgreSQL connection pool
- repository: Base class for PostgreSQL repositories
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_connection_pool, close_connection_pool
from .exceptions import (
    ErrorCategory,
    AppError,
    AuthorizationError,
    IncorrectInputError,
    NotFoundError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "get_connection_pool",
    "close_connection_pool",
    "ErrorCategory",
    "AppError",
    "AuthorizationError",
    "IncorrectInputError",
    "NotFoundError",
    "AuthenticatedUser",
]
