"""
In-memory refresh token repository.

For testing and local development. Use PostgresRefreshTokenRepository for production.
"""

from uuid import UUID

from modules.tokens.models import RefreshToken
from .models import SessionRecord


class InMemoryRefreshTokenRepository:
    """Dict-backed implementation of IRefreshTokenRepository."""

    def __init__(self) -> None:
        self._records: dict[UUID, SessionRecord] = {}

    async def add(self, refresh: RefreshToken) -> None:
        record = SessionRecord.from_refresh(refresh)
        self._records[record.token_id] = record

    async def exists(self, token_id: UUID, user_id: UUID, token: str) -> bool:
        record = self._records.get(token_id)
        return (
            record is not None
            and record.user_id == user_id
            and record.token == token
        )

    async def delete(self, token_id: UUID) -> None:
        self._records.pop(token_id, None)

    async def delete_for_user(self, user_id: UUID) -> None:
        self._records = {
            token_id: record
            for token_id, record in self._records.items()
            if record.user_id != user_id
        }

    async def count_for_user(self, user_id: UUID) -> int:
        return sum(1 for record in self._records.values() if record.user_id == user_id)
