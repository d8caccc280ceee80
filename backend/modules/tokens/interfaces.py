"""
Token module interface.
"""

from typing import Protocol, runtime_checkable

from .models import AccessClaims, AccessToken, RefreshClaims, RefreshToken


@runtime_checkable
class ITokenCodec(Protocol):
    """
    Interface for signing and verifying tokens.

    All methods are pure computation and never block on I/O.
    """

    def create_access(self, claims: AccessClaims) -> AccessToken:
        """Stamp expiry on claims, sign them, and return claims + token."""
        ...

    def create_refresh(self, claims: RefreshClaims) -> RefreshToken:
        """Assign a fresh token identity, stamp expiry, sign, and return."""
        ...

    def validate_access(self, token: str) -> AccessToken:
        """
        Verify an access token.

        Raises:
            InvalidTokenError: If the token is invalid or expired
        """
        ...

    def validate_refresh(self, token: str) -> RefreshToken:
        """
        Verify a refresh token's signature and expiry (not its revocation state).

        Raises:
            InvalidTokenError: If the token is invalid or expired
        """
        ...
