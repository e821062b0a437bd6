"""
repositories/postgres.py
------------------------
Shared plumbing for the PostgreSQL-backed repositories: borrowing a pooled
connection, committing or rolling back, and the generic update/delete/clear
queries that only differ by table and column names.
"""

from typing import Any

import psycopg2

from db.connection import get_connection, release_connection
from repositories.base import CollectionRepository
from utils.exceptions import PersistenceError
from utils.logger import get_logger

logger = get_logger(__name__)


class PostgresRepository(CollectionRepository):
    """
    Base class for table-per-collection repositories.

    Subclasses set:
        table: Table name.
        columns: Mapping of model attribute name -> column name for
            every attribute that `update()` may change.
    """

    table: str = ""
    columns: dict[str, str] = {}

    def _execute(self, sql: str, params: Any = (), fetch: bool = False):
        """
        Run one statement in its own transaction.

        Returns:
            All fetched rows when `fetch` is set, otherwise the affected row count.

        Raises:
            PersistenceError: On any database error (after rollback).
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                result = cur.fetchall() if fetch else cur.rowcount
            conn.commit()
            return result
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Query on '{self.table}' failed: {e}")
            raise PersistenceError(f"Query on '{self.table}' failed: {e}") from e
        finally:
            release_connection(conn)

    def _adapt(self, attr: str, value: Any) -> Any:
        """Convert a model value into a query parameter."""
        return value

    # ── UPDATE ────────────────────────────────────────────

    def update(self, item_id: str, changes: dict) -> bool:
        if not changes:
            return True
        assignments = []
        params: list = []
        for attr, value in changes.items():
            column = self.columns.get(attr)
            if column is None:
                raise ValueError(f"Unknown or immutable field '{attr}'")
            assignments.append(f"{column} = %s")
            params.append(self._adapt(attr, value))
        params.append(item_id)
        sql = f"UPDATE {self.table} SET {', '.join(assignments)} WHERE id = %s;"
        return self._execute(sql, params) > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, item_id: str) -> bool:
        deleted = self._execute(f"DELETE FROM {self.table} WHERE id = %s;", (item_id,)) > 0
        if deleted:
            logger.info(f"Deleted #{item_id} from {self.table}")
        return deleted

    def clear(self) -> None:
        self._execute(f"DELETE FROM {self.table};")
        logger.info(f"Cleared table {self.table}")
