"""
db/connection.py
----------------
Process-wide PostgreSQL connection pool behind STORAGE_BACKEND=postgres.

The local backend never touches this module; `main` still calls
`close_pool()` on shutdown, which is a no-op when no pool was opened.
Every PostgreSQL repository borrows a connection per statement and hands
it back in a `finally` block.
"""

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL
from utils.exceptions import PersistenceError
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(min_conn: int = 1, max_conn: int = 5, dsn: str = DATABASE_URL) -> None:
    """
    Open the ledger's connection pool. Calling it again is a no-op.

    Args:
        min_conn: Connections opened up front.
        max_conn: Upper bound on borrowed connections.
        dsn: libpq connection string; defaults to DATABASE_URL built from DB_*.

    Raises:
        PersistenceError: If the ledger database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, dsn)
        logger.info(f"Ledger database pool ready ({min_conn}-{max_conn} connections).")
    except psycopg2.OperationalError as e:
        logger.error(f"Ledger database unreachable: {e}")
        raise PersistenceError(f"Database unreachable: {e}") from e


def get_connection():
    """
    Borrow a connection for one repository statement.

    Raises:
        PersistenceError: If the postgres backend was never initialized.
    """
    if _pool is None:
        raise PersistenceError(
            "PostgreSQL backend not initialized; build it with build_repositories('postgres')"
        )
    return _pool.getconn()


def release_connection(conn) -> None:
    """Hand a borrowed connection back to the pool."""
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close every pooled connection, if the postgres backend was used."""
    global _pool
    if _pool is None:
        return
    _pool.closeall()
    _pool = None
    logger.info("Ledger database pool closed.")
