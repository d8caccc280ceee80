"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and keeps the HTTP layer free of store
and token details.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from modules.users.models import User

from .models import Token, TokenPair


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to its callers. Implementations must provide all these methods.
    """

    async def sign_in(self, email: str, password: str) -> TokenPair:
        """
        Authenticate with email and password.

        Raises:
            InvalidCredentialsError: If the user is unknown or the password is wrong
        """
        ...

    async def sign_up(self, email: str, password: str, name: str) -> TokenPair:
        """
        Register a new user and sign them in.

        Raises:
            EmailAlreadyExistsError: If the email is already registered
        """
        ...

    async def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new pair. The old token is consumed.

        Raises:
            InvalidTokenError: If the token is invalid, expired, revoked, or
                its owner no longer exists
        """
        ...

    async def federated_sign_in(self, assertion: str) -> TokenPair:
        """
        Sign in with a Google ID token, creating the user if needed.

        Raises:
            IdentityVerificationError: If the assertion cannot be verified
        """
        ...

    async def validate_access(self, access_token: str) -> Token:
        """
        Verify an access token without touching storage.

        Raises:
            InvalidTokenError: If the token is invalid or expired
        """
        ...

    async def update_settings(
        self,
        user_id: UUID,
        currency: str,
        first_day_of_week: str,
        profile_picture_url: str,
    ) -> User:
        """
        Replace a user's settings.

        Raises:
            InvalidCurrencyError: If the currency is not supported
            InvalidFirstDayOfWeekError: If the day is unknown and parsing is strict
            UserNotFoundError: If the user does not exist
        """
        ...

    async def get_user(self, user_id: UUID) -> User:
        """
        Get a user by identity.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...
