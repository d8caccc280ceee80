"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Storage is chosen by the STORAGE_BACKEND setting: PostgreSQL for real
deployments, in-memory dicts for tests and local development.
"""

import asyncio
from typing import TYPE_CHECKING, Awaitable, Optional, TypeVar

from shared.config import Settings, get_settings

from .config import get_settings as get_api_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.identity.interfaces import IIdentityReconciler, IIdentityVerifier
    from modules.sessions.interfaces import IRefreshTokenRepository, ISessionLedger
    from modules.tokens.interfaces import ITokenCodec
    from modules.users.interfaces import IUserRepository
    from modules.users.passwords import PasswordHasher

R = TypeVar("R")


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._user_repository: "IUserRepository | None" = None
        self._refresh_repository: "IRefreshTokenRepository | None" = None
        self._ledger: "ISessionLedger | None" = None
        self._codec: "ITokenCodec | None" = None
        self._verifier: "IIdentityVerifier | None" = None
        self._reconciler: "IIdentityReconciler | None" = None
        self._hasher: "PasswordHasher | None" = None
        self._auth_service: "IAuthService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            if self.settings.storage_backend == "memory":
                from modules.users.memory import InMemoryUserRepository
                self._user_repository = InMemoryUserRepository()
            else:
                from modules.users.repository import PostgresUserRepository
                from shared.database import get_connection_pool
                self._user_repository = PostgresUserRepository(get_connection_pool())
        return self._user_repository

    @property
    def refresh_repository(self) -> "IRefreshTokenRepository":
        """Get the refresh token repository instance."""
        if self._refresh_repository is None:
            if self.settings.storage_backend == "memory":
                from modules.sessions.memory import InMemoryRefreshTokenRepository
                self._refresh_repository = InMemoryRefreshTokenRepository()
            else:
                from modules.sessions.repository import PostgresRefreshTokenRepository
                from shared.database import get_connection_pool
                self._refresh_repository = PostgresRefreshTokenRepository(get_connection_pool())
        return self._refresh_repository

    @property
    def ledger(self) -> "ISessionLedger":
        """Get the session ledger instance."""
        if self._ledger is None:
            from modules.sessions.service import SessionLedger
            self._ledger = SessionLedger(
                self.refresh_repository,
                max_sessions=self.settings.max_user_sessions,
            )
        return self._ledger

    @property
    def codec(self) -> "ITokenCodec":
        """Get the token codec instance."""
        if self._codec is None:
            from modules.tokens.codec import TokenCodec, TokenConfig
            if not self.settings.jwt_secret:
                raise RuntimeError(
                    "Token configuration missing. Set the JWT_SECRET environment variable."
                )
            self._codec = TokenCodec(
                TokenConfig(
                    secret=self.settings.jwt_secret,
                    access_ttl=self.settings.jwt_access_ttl,
                    refresh_ttl=self.settings.jwt_refresh_ttl,
                )
            )
        return self._codec

    @property
    def hasher(self) -> "PasswordHasher":
        """Get the password hasher instance."""
        if self._hasher is None:
            from modules.users.passwords import PasswordHasher
            self._hasher = PasswordHasher(rounds=self.settings.bcrypt_rounds)
        return self._hasher

    @property
    def verifier(self) -> "IIdentityVerifier":
        """Get the Google identity verifier instance."""
        if self._verifier is None:
            from modules.identity.verifier import GoogleIdentityVerifier
            self._verifier = GoogleIdentityVerifier(self.settings.google_client_id)
        return self._verifier

    @property
    def reconciler(self) -> "IIdentityReconciler":
        """Get the identity reconciler instance."""
        if self._reconciler is None:
            from modules.identity.service import IdentityReconciler
            self._reconciler = IdentityReconciler(self.user_repository, self.hasher)
        return self._reconciler

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.user_repository,
                ledger=self.ledger,
                codec=self.codec,
                verifier=self.verifier,
                reconciler=self.reconciler,
                hasher=self.hasher,
                first_day_of_week_policy=self.settings.first_day_of_week_policy,
            )
        return self._auth_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_repository = None
        self._refresh_repository = None
        self._ledger = None
        self._codec = None
        self._verifier = None
        self._reconciler = None
        self._hasher = None
        self._auth_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


async def with_deadline(call: Awaitable[R]) -> R:
    """
    Await a service call, cancelling it after the request timeout.

    Cancellation reaches the store: in-flight queries are aborted and open
    transactions roll back.

    Raises:
        asyncio.TimeoutError: If the call did not finish in time
    """
    timeout = get_api_settings().request_timeout_seconds
    return await asyncio.wait_for(call, timeout=timeout)


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth
