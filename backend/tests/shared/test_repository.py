"""Tests for shared/repository.py."""

import asyncio
import threading
from typing import Optional

import pytest
from unittest.mock import MagicMock

from shared.exceptions import NotFoundError
from shared.repository import BaseRepository


def make_pool(row: Optional[dict] = None):
    """Mock pool whose single connection returns row from fetchone."""
    pool = MagicMock()
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.fetchone.return_value = row
    cursor.rowcount = 1
    pool.getconn.return_value = conn
    return pool, conn, cursor


class ItemNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Item not found", slug="item-not-found")


class ItemRepository(BaseRepository[dict]):
    async def get(self, item_id: int) -> dict:
        return await self._get(
            "select * from items where id = %s", (item_id,), ItemNotFoundError()
        )

    async def count(self) -> int:
        return await self._fetch_value("select count(*) from items")

    async def remove(self, item_id: int) -> int:
        return await self._execute("delete from items where id = %s", (item_id,))


class TestQueries:
    @pytest.mark.asyncio
    async def test_fetch_one_commits_and_returns_connection(self):
        """A standalone call should commit and give the connection back."""
        pool, conn, cursor = make_pool({"id": 1, "name": "test"})
        repo = ItemRepository(pool)

        row = await repo.get(1)

        assert row == {"id": 1, "name": "test"}
        cursor.execute.assert_called_once_with("select * from items where id = %s", (1,))
        conn.commit.assert_called_once()
        pool.putconn.assert_called_once_with(conn)

    @pytest.mark.asyncio
    async def test_missing_row_raises_given_not_found(self):
        """No rows should become the repository's NotFoundError."""
        pool, _, _ = make_pool(None)
        repo = ItemRepository(pool)

        with pytest.raises(ItemNotFoundError):
            await repo.get(1)

    @pytest.mark.asyncio
    async def test_missing_row_defaults_to_not_found(self):
        pool, _, _ = make_pool(None)
        repo = ItemRepository(pool)

        with pytest.raises(NotFoundError):
            await repo._get("select 1")

    @pytest.mark.asyncio
    async def test_fetch_value_returns_first_column(self):
        pool, _, _ = make_pool({"count": 3})
        repo = ItemRepository(pool)

        assert await repo.count() == 3

    @pytest.mark.asyncio
    async def test_execute_returns_rowcount(self):
        pool, _, cursor = make_pool()
        cursor.rowcount = 2
        repo = ItemRepository(pool)

        assert await repo.remove(1) == 2

    @pytest.mark.asyncio
    async def test_store_error_rolls_back_and_propagates(self):
        """Store errors other than missing rows should pass through unchanged."""
        pool, conn, cursor = make_pool()
        cursor.execute.side_effect = RuntimeError("connection lost")
        repo = ItemRepository(pool)

        with pytest.raises(RuntimeError, match="connection lost"):
            await repo.get(1)

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        pool.putconn.assert_called_once_with(conn)


class TestTransactions:
    @pytest.mark.asyncio
    async def test_commits_once_on_success(self):
        """Calls inside a transaction share one connection and commit at the end."""
        pool, conn, _ = make_pool({"id": 1})
        repo = ItemRepository(pool)

        async with repo.transaction() as tx:
            assert tx is not repo
            assert tx.in_transaction
            await tx.get(1)
            await tx.remove(1)
            conn.commit.assert_not_called()

        pool.getconn.assert_called_once()
        conn.commit.assert_called_once()
        conn.rollback.assert_not_called()
        pool.putconn.assert_called_once_with(conn)

    @pytest.mark.asyncio
    async def test_rolls_back_on_error(self):
        """Any exception in the block should roll back and propagate."""
        pool, conn, _ = make_pool({"id": 1})
        repo = ItemRepository(pool)

        with pytest.raises(ValueError):
            async with repo.transaction() as tx:
                await tx.remove(1)
                raise ValueError("boom")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        pool.putconn.assert_called_once_with(conn)

    @pytest.mark.asyncio
    async def test_nested_transaction_joins_outer(self):
        pool, _, _ = make_pool()
        repo = ItemRepository(pool)

        async with repo.transaction() as tx:
            async with tx.transaction() as inner:
                assert inner is tx

        pool.getconn.assert_called_once()

    @pytest.mark.asyncio
    async def test_run_transactional_passes_bound_handle(self):
        """The callback should receive a handle bound to the transaction."""
        pool, conn, _ = make_pool({"id": 1})
        repo = ItemRepository(pool)

        async def callback(handle: ItemRepository) -> dict:
            assert handle.in_transaction
            return await handle.get(1)

        result = await repo.run_transactional(callback)

        assert result == {"id": 1}
        conn.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_run_transactional_rolls_back_on_callback_error(self):
        pool, conn, _ = make_pool()
        repo = ItemRepository(pool)

        async def callback(handle: ItemRepository) -> None:
            raise NotFoundError()

        with pytest.raises(NotFoundError):
            await repo.run_transactional(callback)

        conn.rollback.assert_called_once()


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancel_aborts_in_flight_query(self):
        """Cancelling the caller should cancel the statement on the server."""
        pool, conn, _ = make_pool()
        repo = ItemRepository(pool)
        started = threading.Event()
        release = threading.Event()

        def slow_query(cur):
            started.set()
            release.wait(5)
            return None

        task = asyncio.create_task(repo._run(slow_query))
        await asyncio.to_thread(started.wait, 5)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        conn.cancel.assert_called_once()
        release.set()

    @pytest.mark.asyncio
    async def test_cancel_after_connection_returned_leaves_it_alone(self):
        """A connection already back in the pool must not be cancelled."""
        pool, conn, _ = make_pool()
        returned = threading.Event()
        pool.putconn.side_effect = lambda c: returned.set()
        repo = ItemRepository(pool)

        task = asyncio.create_task(repo.remove(1))
        await asyncio.sleep(0)
        # Block the loop so the worker finishes before the task sees the result.
        assert returned.wait(5)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        pool.putconn.assert_called_once_with(conn)
        conn.cancel.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancel_inside_transaction_aborts_statement(self):
        pool, conn, _ = make_pool()
        repo = ItemRepository(pool)
        started = threading.Event()
        release = threading.Event()

        def slow_query(cur):
            started.set()
            release.wait(5)
            return None

        with pytest.raises(asyncio.CancelledError):
            async with repo.transaction() as tx:
                task = asyncio.create_task(tx._run(slow_query))
                await asyncio.to_thread(started.wait, 5)
                task.cancel()
                try:
                    await task
                finally:
                    release.set()

        conn.cancel.assert_called_once()
        conn.rollback.assert_called_once()
