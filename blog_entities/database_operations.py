import logging
from typing import Any

import asyncpg

from blog_entities.db_context import DatabaseManager
from blog_entities.errors import ErrorKind

logger = logging.getLogger(__name__)


class DatabaseOperations:
    """Composition class for database operations.

    Every method takes an optional explicit connection; without one the
    connection bound by ``DatabaseManager.transaction`` is used.
    """

    @staticmethod
    def get_connection(conn: asyncpg.Connection | None = None) -> asyncpg.Connection:
        """Return the explicit connection, or the current one from context"""
        conn = conn or DatabaseManager.get_current_connection()
        if not conn:
            raise ValueError(
                "No connection given and no active transaction found. "
                "Pass conn= or call within a transaction context."
            )
        return conn

    @staticmethod
    def _log(query: str, params: list[Any]):
        logger.debug("Executing %s (%d params)", query, len(params))

    @staticmethod
    def _log_failure(query: str, exc: asyncpg.PostgresError):
        logger.error(
            "Statement failed [%s] %s: %s",
            ErrorKind.STORAGE,
            query,
            exc,
            extra={"error_kind": ErrorKind.STORAGE.value, "sqlstate": exc.sqlstate},
        )

    async def fetch_all(
        self, query: str, params: list[Any], conn: asyncpg.Connection | None = None
    ) -> list[Any]:
        """Execute query and fetch all rows"""
        conn = self.get_connection(conn)
        self._log(query, params)
        try:
            return await conn.fetch(query, *params)
        except asyncpg.PostgresError as exc:
            self._log_failure(query, exc)
            raise

    async def fetch_one(
        self, query: str, params: list[Any], conn: asyncpg.Connection | None = None
    ) -> Any:
        """Execute a query and fetch one row"""
        conn = self.get_connection(conn)
        self._log(query, params)
        try:
            return await conn.fetchrow(query, *params)
        except asyncpg.PostgresError as exc:
            self._log_failure(query, exc)
            raise

    async def execute_query(
        self, query: str, params: list[Any], conn: asyncpg.Connection | None = None
    ) -> str:
        """Execute query and return the status string (e.g. ``DELETE 1``)"""
        conn = self.get_connection(conn)
        self._log(query, params)
        try:
            return await conn.execute(query, *params)
        except asyncpg.PostgresError as exc:
            self._log_failure(query, exc)
            raise
