"""
Token module.

Signs and verifies access and refresh JWTs.

Public API:
- ITokenCodec: Interface for token operations
- TokenCodec, TokenConfig: HMAC implementation and its configuration
- AccessClaims, RefreshClaims, AccessToken, RefreshToken: Models
- Token exceptions: InvalidTokenError, ExpiredTokenError, TokenSigningError
"""

from .codec import TokenCodec, TokenConfig
from .interfaces import ITokenCodec
from .models import (
    AccessClaims,
    RefreshClaims,
    AccessToken,
    RefreshToken,
    new_access_claims,
    new_refresh_claims,
)
from .exceptions import InvalidTokenError, ExpiredTokenError, TokenSigningError

__all__ = [
    # Interface
    "ITokenCodec",
    # Implementation
    "TokenCodec",
    "TokenConfig",
    # Models
    "AccessClaims",
    "RefreshClaims",
    "AccessToken",
    "RefreshToken",
    "new_access_claims",
    "new_refresh_claims",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "TokenSigningError",
]
