"""
Refresh token repository for database access.

Encapsulates all SQL for the refresh_tokens table.
"""

from datetime import datetime, timezone
from uuid import UUID

from shared.repository import BaseRepository
from modules.tokens.models import RefreshToken
from .models import SessionRecord


class PostgresRefreshTokenRepository(BaseRepository[SessionRecord]):
    """PostgreSQL implementation of IRefreshTokenRepository."""

    async def add(self, refresh: RefreshToken) -> None:
        record = SessionRecord.from_refresh(refresh)
        now = datetime.now(timezone.utc)
        await self._execute(
            "insert into refresh_tokens(uuid, user_uuid, token, created_at, updated_at) "
            "values (%s, %s, %s, %s, %s)",
            (record.token_id, record.user_id, record.token, now, now),
        )

    async def exists(self, token_id: UUID, user_id: UUID, token: str) -> bool:
        row = await self._fetch_one(
            "select 1 as found from refresh_tokens "
            "where uuid = %s and user_uuid = %s and token = %s",
            (token_id, user_id, token),
        )
        return row is not None

    async def delete(self, token_id: UUID) -> None:
        await self._execute("delete from refresh_tokens where uuid = %s", (token_id,))

    async def delete_for_user(self, user_id: UUID) -> None:
        await self._execute("delete from refresh_tokens where user_uuid = %s", (user_id,))

    async def count_for_user(self, user_id: UUID) -> int:
        count = await self._fetch_value(
            "select count(*) from refresh_tokens where user_uuid = %s",
            (user_id,),
        )
        return int(count or 0)
