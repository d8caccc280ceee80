"""
Session ledger implementation.

Tracks each user's live refresh tokens and applies the concurrent-session cap.
"""

import logging
from uuid import UUID

from modules.tokens.models import RefreshToken

from .interfaces import IRefreshTokenRepository, ISessionLedger

logger = logging.getLogger(__name__)


class SessionLedger(ISessionLedger):
    """
    Per-user ledger of refresh tokens.

    The cap is checked with a strict comparison: a user already holding
    exactly max_sessions rows still gets one more, and only the issuance
    after that wipes the slate. The count, wipe and insert are separate
    store calls, so concurrent issuance for the same user can interleave.
    """

    def __init__(self, repository: IRefreshTokenRepository, max_sessions: int):
        if max_sessions < 0:
            raise ValueError("max_sessions must not be negative")
        self._repository = repository
        self._max_sessions = max_sessions

    @property
    def max_sessions(self) -> int:
        return self._max_sessions

    async def count(self, user_id: UUID) -> int:
        return await self._repository.count_for_user(user_id)

    async def add(self, refresh: RefreshToken) -> None:
        await self._repository.add(refresh)

    async def exists(self, token_id: UUID, user_id: UUID, token: str) -> bool:
        return await self._repository.exists(token_id, user_id, token)

    async def delete(self, token_id: UUID) -> None:
        await self._repository.delete(token_id)

    async def delete_all_for_user(self, user_id: UUID) -> None:
        await self._repository.delete_for_user(user_id)

    async def enforce_cap(self, user_id: UUID) -> bool:
        """
        Revoke every session of the user when the count is over the cap.

        Returns:
            True if the user's sessions were wiped
        """
        count = await self.count(user_id)
        if count > self._max_sessions:
            logger.info(
                f"User {user_id} holds {count} sessions (cap {self._max_sessions}); "
                "revoking all"
            )
            await self.delete_all_for_user(user_id)
            return True
        return False

    async def open_session(self, refresh: RefreshToken) -> None:
        """
        Record a freshly signed refresh token as a new session.

        The token must not be handed to the caller unless this succeeds.
        """
        await self.enforce_cap(refresh.claims.user_id)
        await self.add(refresh)
        logger.debug(f"Opened session {refresh.claims.token_id} for user {refresh.claims.user_id}")
