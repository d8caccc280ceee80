"""
Connection pool factory for PostgreSQL.

Repositories borrow connections from a single process-wide pool.
"""

from typing import Optional
from psycopg2.pool import ThreadedConnectionPool

from .config import get_settings

# Module-level pool cache
_pool: Optional[ThreadedConnectionPool] = None


def get_connection_pool() -> ThreadedConnectionPool:
    """
    Get the shared PostgreSQL connection pool.

    The pool is thread-safe: repositories run their queries on worker
    threads and each call borrows its own connection.

    Returns:
        ThreadedConnectionPool configured from DATABASE_URL
    """
    global _pool

    if _pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError(
                "Database configuration missing. "
                "Set the DATABASE_URL environment variable."
            )
        _pool = ThreadedConnectionPool(
            settings.db_pool_min,
            settings.db_pool_max,
            dsn=settings.database_url,
        )

    return _pool


def close_connection_pool() -> None:
    """
    Close all pooled connections and drop the cached pool.

    Useful on shutdown, for testing, or when configuration changes.
    """
    global _pool
    if _pool is not None:
        _pool.closeall()
    _pool = None
