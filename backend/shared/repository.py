"""
Base repository class for database access.

Provides a common abstraction layer for all PostgreSQL repositories,
encapsulating connection-pool access and the shared mechanics of
running a query:

- queries run on worker threads, one borrowed connection per call
- each call commits on its own unless the repository is bound to a transaction
- a cancelled caller aborts the in-flight statement server-side
- "no rows" is translated into NotFoundError here and nowhere else
"""

import asyncio
import threading
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Generic, Optional, TypeVar

from psycopg2.extensions import connection as PgConnection
from psycopg2.extensions import cursor as PgCursor
from psycopg2.extras import RealDictCursor, register_uuid
from psycopg2.pool import ThreadedConnectionPool

from .exceptions import NotFoundError

# Pass uuid.UUID parameters and read uuid columns back as uuid.UUID.
register_uuid()

T = TypeVar("T")
R = TypeVar("R")
RepoT = TypeVar("RepoT", bound="BaseRepository")


class _Statement:
    """
    A connection while a worker thread is using it.

    cancel() only reaches the server while the worker still holds the
    connection; once release() has run it may already belong to someone else.
    """

    def __init__(self, conn: PgConnection) -> None:
        self.conn = conn
        self._lock = threading.Lock()
        self._active = True

    def release(self) -> None:
        with self._lock:
            self._active = False

    def cancel(self) -> None:
        with self._lock:
            if self._active:
                self.conn.cancel()


class BaseRepository(Generic[T]):
    """
    Base class for all PostgreSQL repositories.

    Subclasses implement domain-specific data access methods on top of
    _fetch_one / _get / _fetch_value / _execute and handle row-to-model
    mapping internally. Subclasses must keep the (pool, connection)
    constructor signature so transaction handles can be created.

    Example:
        class UserRepository(BaseRepository[User]):
            async def find_by_id(self, user_id: UUID) -> User:
                row = await self._get(
                    "select * from users where uuid = %s",
                    (user_id,),
                    UserNotFoundError(),
                )
                return self._map_to_user(row)
    """

    def __init__(
        self,
        pool: ThreadedConnectionPool,
        connection: Optional[PgConnection] = None,
    ) -> None:
        """
        Initialize the repository.

        Args:
            pool: Connection pool to borrow connections from.
            connection: When set, the repository is a handle bound to an
                open transaction on this connection and never commits.
        """
        self._pool = pool
        self._conn = connection

    @property
    def in_transaction(self) -> bool:
        return self._conn is not None

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @asynccontextmanager
    async def transaction(self: RepoT) -> AsyncIterator[RepoT]:
        """
        Open a transaction and yield a repository handle bound to it.

        The transaction commits when the block exits normally and rolls
        back on any exception, cancellation included. Nested use joins
        the outer transaction.
        """
        if self._conn is not None:
            yield self
            return

        conn = self._pool.getconn()
        handle = type(self)(self._pool, connection=conn)
        try:
            yield handle
        except BaseException:
            await self._finish(conn, commit=False)
            raise
        await self._finish(conn, commit=True)

    async def run_transactional(
        self: RepoT,
        callback: Callable[[RepoT], Awaitable[R]],
    ) -> R:
        """Run callback with a transaction-bound handle of this repository."""
        async with self.transaction() as handle:
            return await callback(handle)

    async def _finish(self, conn: PgConnection, commit: bool) -> None:
        def finish() -> None:
            try:
                if commit:
                    conn.commit()
                else:
                    conn.rollback()
            finally:
                self._pool.putconn(conn)

        # The connection must go back to the pool even if we are cancelled again.
        await asyncio.shield(asyncio.to_thread(finish))

    # -------------------------------------------------------------------------
    # Query helpers
    # -------------------------------------------------------------------------

    async def _run(self, operation: Callable[[PgCursor], R]) -> R:
        """Run operation(cursor) on a worker thread."""
        conn = self._conn if self._conn is not None else self._pool.getconn()
        statement = _Statement(conn)
        try:
            return await asyncio.to_thread(self._run_sync, statement, operation)
        except asyncio.CancelledError:
            statement.cancel()
            raise

    def _run_sync(self, statement: _Statement, operation: Callable[[PgCursor], R]) -> R:
        conn = statement.conn
        owned = self._conn is None
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                result = operation(cur)
            if owned:
                conn.commit()
            return result
        except Exception:
            if owned:
                conn.rollback()
            raise
        finally:
            # Released before the pool sees it, so no later cancel can reach it.
            statement.release()
            if owned:
                self._pool.putconn(conn)

    async def _fetch_one(self, query: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        def operation(cur: PgCursor) -> Optional[dict[str, Any]]:
            cur.execute(query, params)
            row = cur.fetchone()
            return dict(row) if row is not None else None

        return await self._run(operation)

    async def _get(
        self,
        query: str,
        params: tuple = (),
        not_found: Optional[NotFoundError] = None,
    ) -> dict[str, Any]:
        """Fetch exactly one row or raise not_found (NotFoundError by default)."""
        row = await self._fetch_one(query, params)
        if row is None:
            raise not_found or NotFoundError()
        return row

    async def _fetch_value(self, query: str, params: tuple = ()) -> Any:
        def operation(cur: PgCursor) -> Any:
            cur.execute(query, params)
            row = cur.fetchone()
            if row is None:
                return None
            return next(iter(row.values()))

        return await self._run(operation)

    async def _execute(self, query: str, params: tuple = ()) -> int:
        """Execute a statement and return the affected row count."""
        def operation(cur: PgCursor) -> int:
            cur.execute(query, params)
            return cur.rowcount

        return await self._run(operation)
