"""
Sessions module interfaces.

IRefreshTokenRepository is the refresh-token half of the credential store;
ISessionLedger is the policy layer the auth module talks to.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from modules.tokens.models import RefreshToken


@runtime_checkable
class IRefreshTokenRepository(Protocol):
    """
    Interface for refresh-token row persistence.

    Each method is a single atomic store operation. Nothing here spans
    more than one statement.
    """

    async def add(self, refresh: RefreshToken) -> None:
        """Insert a row for a signed refresh token."""
        ...

    async def exists(self, token_id: UUID, user_id: UUID, token: str) -> bool:
        """True only if a row matches identity, owner and raw string exactly."""
        ...

    async def delete(self, token_id: UUID) -> None:
        """Delete one row by token identity. Deleting a missing row is a no-op."""
        ...

    async def delete_for_user(self, user_id: UUID) -> None:
        """Delete every row owned by the user."""
        ...

    async def count_for_user(self, user_id: UUID) -> int:
        """Number of rows owned by the user."""
        ...


@runtime_checkable
class ISessionLedger(Protocol):
    """Interface for the per-user session ledger."""

    async def count(self, user_id: UUID) -> int:
        ...

    async def add(self, refresh: RefreshToken) -> None:
        ...

    async def exists(self, token_id: UUID, user_id: UUID, token: str) -> bool:
        ...

    async def delete(self, token_id: UUID) -> None:
        ...

    async def delete_all_for_user(self, user_id: UUID) -> None:
        ...

    async def enforce_cap(self, user_id: UUID) -> bool:
        """Wipe all of the user's sessions if over the cap; return whether it did."""
        ...

    async def open_session(self, refresh: RefreshToken) -> None:
        """Apply the cap for the token's owner, then persist the token."""
        ...
