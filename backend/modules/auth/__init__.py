"""
Authentication module.

Orchestrates sign-up, sign-in, refresh rotation, Google sign-in, access
token validation and settings updates.

Public API:
- IAuthService: Interface for auth operations
- AuthService: Implementation wired from the tokens, sessions, identity
  and users modules
- Token, TokenPair: Issued credentials
- Auth exceptions: InvalidCredentialsError, RevokedTokenError, CouldNotAuthorizeError
"""

from .interfaces import IAuthService
from .models import Token, TokenPair
from .service import AuthService
from .exceptions import (
    InvalidCredentialsError,
    RevokedTokenError,
    CouldNotAuthorizeError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Implementation
    "AuthService",
    # Models
    "Token",
    "TokenPair",
    # Exceptions
    "InvalidCredentialsError",
    "RevokedTokenError",
    "CouldNotAuthorizeError",
]
