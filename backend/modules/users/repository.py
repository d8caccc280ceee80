"""
User repository for database access.

Encapsulates all SQL and row mapping for the users table.
"""

from typing import Any, Optional
from uuid import UUID

from psycopg2 import errors as pg_errors
from psycopg2.extras import Json

from shared.repository import BaseRepository
from .exceptions import EmailAlreadyExistsError, UserNotFoundError
from .models import User, UserSettings

USER_COLUMNS = "uuid, email, name, hash, settings, created_at, updated_at"


class PostgresUserRepository(BaseRepository[User]):
    """
    PostgreSQL implementation of IUserRepository.

    Note: This repository does NOT check email uniqueness itself; the
    unique index does, and a violation is reported as EmailAlreadyExistsError.
    """

    async def find_by_id(self, user_id: UUID) -> User:
        row = await self._get(
            f"select {USER_COLUMNS} from users where uuid = %s",
            (user_id,),
            UserNotFoundError(user_id),
        )
        return self._map_to_user(row)

    async def find_by_email(self, email: str) -> User:
        row = await self._get(
            f"select {USER_COLUMNS} from users where email = %s",
            (email,),
            UserNotFoundError(),
        )
        return self._map_to_user(row)

    async def add(self, user: User) -> None:
        try:
            await self._execute(
                f"insert into users({USER_COLUMNS}) values (%s, %s, %s, %s, %s, %s, %s)",
                (
                    user.id,
                    user.email,
                    user.name,
                    user.password_hash,
                    Json(user.settings.to_storage()),
                    user.created_at,
                    user.updated_at,
                ),
            )
        except pg_errors.UniqueViolation as exc:
            raise EmailAlreadyExistsError() from exc

    async def update_settings(self, user_id: UUID, settings: UserSettings) -> User:
        row = await self._get(
            f"update users set settings = %s, updated_at = now() "
            f"where uuid = %s returning {USER_COLUMNS}",
            (Json(settings.to_storage()), user_id),
            UserNotFoundError(user_id),
        )
        return self._map_to_user(row)

    def _map_to_user(self, row: dict[str, Any]) -> User:
        """Map database row to User model."""
        settings: Optional[dict[str, str]] = row.get("settings")
        return User(
            id=row["uuid"],
            email=row["email"],
            name=row["name"] or "",
            password_hash=row["hash"],
            settings=UserSettings.from_storage(settings or {}),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
