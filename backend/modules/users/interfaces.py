"""
Users module interface.

The user half of the credential store contract. The auth module depends on
IUserRepository, not on a concrete store, so PostgreSQL and in-memory
implementations are interchangeable.
"""

from typing import AsyncContextManager, Awaitable, Callable, Protocol, TypeVar, runtime_checkable
from uuid import UUID

from .models import User, UserSettings

R = TypeVar("R")


@runtime_checkable
class IUserRepository(Protocol):
    """
    Interface for user persistence.

    Lookups raise UserNotFoundError (a NotFoundError) when no row matches;
    every other store failure propagates unchanged.
    """

    async def find_by_id(self, user_id: UUID) -> User:
        """
        Get a user by identity.

        Raises:
            UserNotFoundError: If no such user exists
        """
        ...

    async def find_by_email(self, email: str) -> User:
        """
        Get a user by exact email.

        Raises:
            UserNotFoundError: If no such user exists
        """
        ...

    async def add(self, user: User) -> None:
        """
        Insert a new user.

        Raises:
            EmailAlreadyExistsError: If the email is already taken
        """
        ...

    async def update_settings(self, user_id: UUID, settings: UserSettings) -> User:
        """Replace a user's settings wholesale and return the updated user."""
        ...

    def transaction(self) -> AsyncContextManager["IUserRepository"]:
        """
        Open a transaction and yield a repository handle bound to it.

        Commits when the block exits normally, rolls back otherwise.
        """
        ...

    async def run_transactional(
        self,
        callback: Callable[["IUserRepository"], Awaitable[R]],
    ) -> R:
        """Run callback with a transaction-bound handle; commit or roll back."""
        ...
