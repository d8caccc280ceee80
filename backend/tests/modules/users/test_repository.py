"""Tests for PostgresUserRepository against a mocked connection pool."""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

from psycopg2 import errors as pg_errors
from psycopg2.extras import Json

from modules.users.exceptions import EmailAlreadyExistsError, UserNotFoundError
from modules.users.interfaces import IUserRepository
from modules.users.models import Currency, User, UserSettings, Weekday
from modules.users.repository import PostgresUserRepository


def make_row(**overrides) -> dict:
    now = datetime.now(timezone.utc)
    row = {
        "uuid": uuid4(),
        "email": "a@b.com",
        "name": "A",
        "hash": "hash",
        "settings": {
            "currency": "EUR",
            "first_day_of_week": "SUN",
            "profile_picture_url": "pic",
        },
        "created_at": now,
        "updated_at": now,
    }
    row.update(overrides)
    return row


@pytest.fixture
def pool():
    pool = MagicMock()
    pool.getconn.return_value = MagicMock()
    return pool


@pytest.fixture
def cursor(pool):
    return pool.getconn.return_value.cursor.return_value.__enter__.return_value


class TestPostgresUserRepository:
    def test_implements_interface(self, pool):
        assert isinstance(PostgresUserRepository(pool), IUserRepository)

    @pytest.mark.asyncio
    async def test_find_by_id_maps_row(self, pool, cursor):
        row = make_row()
        cursor.fetchone.return_value = row

        user = await PostgresUserRepository(pool).find_by_id(row["uuid"])

        assert user.id == row["uuid"]
        assert user.email == "a@b.com"
        assert user.password_hash == "hash"
        assert user.settings == UserSettings(
            currency=Currency.EUR,
            first_day_of_week=Weekday.SUN,
            profile_picture_url="pic",
        )
        query, params = cursor.execute.call_args.args
        assert "where uuid = %s" in query
        assert params == (row["uuid"],)

    @pytest.mark.asyncio
    async def test_find_by_email_not_found(self, pool, cursor):
        cursor.fetchone.return_value = None

        with pytest.raises(UserNotFoundError):
            await PostgresUserRepository(pool).find_by_email("missing@b.com")

    @pytest.mark.asyncio
    async def test_bad_stored_day_falls_back(self, pool, cursor):
        row = make_row(settings={"currency": "USD", "first_day_of_week": "nope"})
        cursor.fetchone.return_value = row

        user = await PostgresUserRepository(pool).find_by_email("a@b.com")

        assert user.settings.first_day_of_week is Weekday.MON

    @pytest.mark.asyncio
    async def test_add_inserts_settings_as_json(self, pool, cursor):
        user = User(email="a@b.com", name="A", password_hash="hash")

        await PostgresUserRepository(pool).add(user)

        query, params = cursor.execute.call_args.args
        assert query.startswith("insert into users")
        assert params[0] == user.id
        assert params[3] == "hash"
        assert isinstance(params[4], Json)
        assert params[4].adapted == user.settings.to_storage()
        pool.getconn.return_value.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_add_duplicate_email(self, pool, cursor):
        cursor.execute.side_effect = pg_errors.UniqueViolation()

        with pytest.raises(EmailAlreadyExistsError):
            await PostgresUserRepository(pool).add(
                User(email="a@b.com", password_hash="hash")
            )

    @pytest.mark.asyncio
    async def test_update_settings_returns_updated_user(self, pool, cursor):
        row = make_row()
        cursor.fetchone.return_value = row
        settings = UserSettings(currency=Currency.EUR)

        user = await PostgresUserRepository(pool).update_settings(row["uuid"], settings)

        assert user.id == row["uuid"]
        query, params = cursor.execute.call_args.args
        assert query.startswith("update users set settings")
        assert params[1] == row["uuid"]

    @pytest.mark.asyncio
    async def test_update_settings_missing_user(self, pool, cursor):
        cursor.fetchone.return_value = None

        with pytest.raises(UserNotFoundError):
            await PostgresUserRepository(pool).update_settings(uuid4(), UserSettings())

    @pytest.mark.asyncio
    async def test_run_transactional_gives_bound_repository(self, pool, cursor):
        repo = PostgresUserRepository(pool)
        user = User(email="a@b.com", password_hash="hash")

        async def insert(handle):
            assert isinstance(handle, PostgresUserRepository)
            assert handle.in_transaction
            await handle.add(user)

        await repo.run_transactional(insert)

        conn = pool.getconn.return_value
        conn.commit.assert_called_once()
        pool.putconn.assert_called_once_with(conn)
