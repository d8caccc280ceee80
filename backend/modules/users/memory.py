"""
In-memory user repository.

For testing and local development. Use PostgresUserRepository for production.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Awaitable, Callable, TypeVar
from uuid import UUID

from .exceptions import EmailAlreadyExistsError, UserNotFoundError
from .models import User, UserSettings

R = TypeVar("R")


class InMemoryUserRepository:
    """
    Dict-backed implementation of IUserRepository.

    Each method runs without awaiting, so on a single event loop every
    operation is atomic. A transaction snapshots the table and restores it
    if the block fails.
    """

    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}

    async def find_by_id(self, user_id: UUID) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def find_by_email(self, email: str) -> User:
        for user in self._users.values():
            if user.email == email:
                return user
        raise UserNotFoundError()

    async def add(self, user: User) -> None:
        if any(existing.email == user.email for existing in self._users.values()):
            raise EmailAlreadyExistsError()
        self._users[user.id] = user

    async def update_settings(self, user_id: UUID, settings: UserSettings) -> User:
        user = await self.find_by_id(user_id)
        updated = user.model_copy(
            update={"settings": settings, "updated_at": datetime.now(timezone.utc)}
        )
        self._users[user_id] = updated
        return updated

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["InMemoryUserRepository"]:
        snapshot = dict(self._users)
        try:
            yield self
        except BaseException:
            self._users = snapshot
            raise

    async def run_transactional(
        self,
        callback: Callable[["InMemoryUserRepository"], Awaitable[R]],
    ) -> R:
        async with self.transaction() as handle:
            return await callback(handle)
