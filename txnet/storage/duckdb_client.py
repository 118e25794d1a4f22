"""
DuckDB client for the relational business store.

Provides persistent or in-memory storage for businesses. Each operation
borrows a short-lived cursor from the root connection and closes it before
returning, on both the normal and the error path.
"""

import asyncio
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import duckdb

from ..utils.exceptions import RelationalStoreError

logger = logging.getLogger(__name__)


class DuckDBClient:
    """
    DuckDB client for business storage.

    Supports:
    - Persistent mode: data/txnet.duckdb (local hosting)
    - In-memory mode: :memory: (tests, throwaway demos)

    Blocking DuckDB calls run in a worker thread so the event loop keeps
    serving. Writes are serialized with an asyncio.Lock; DuckDB supports
    concurrent reads natively (MVCC).
    """

    def __init__(self, db_path: str = "data/txnet.duckdb"):
        """
        Initialize DuckDB client.

        Args:
            db_path: Path to DuckDB database file, or ":memory:" for in-memory.
        """
        self.db_path = db_path
        self._is_memory_mode = db_path == ":memory:"
        self._initialized = False
        self.conn: Optional[duckdb.DuckDBPyConnection] = None
        self._write_lock = asyncio.Lock()

    def initialize(self) -> None:
        """
        Open the database and create the schema.

        For persistent mode: Creates the database file if it doesn't exist.
        """
        if self._initialized:
            logger.warning("DuckDB already initialized")
            return

        if not self._is_memory_mode:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Initializing persistent DuckDB at: {self.db_path}")
        else:
            logger.info("Initializing in-memory DuckDB")

        try:
            self.conn = duckdb.connect(self.db_path)
        except (duckdb.Error, OSError) as e:
            logger.error(f"Failed to connect to DuckDB at {self.db_path}: {e}")
            raise RelationalStoreError(str(e)) from e

        self._create_schema()
        self._initialized = True
        logger.info("DuckDB initialization complete")

    def _create_schema(self) -> None:
        """Create the businesses table and its id sequence."""
        if not self.conn:
            raise RuntimeError("DuckDB connection not initialized")

        self.conn.execute("CREATE SEQUENCE IF NOT EXISTS businesses_id_seq START 1")
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS businesses (
                id INTEGER PRIMARY KEY DEFAULT nextval('businesses_id_seq'),
                business_id VARCHAR NOT NULL UNIQUE,
                name VARCHAR NOT NULL,
                industry VARCHAR NOT NULL,
                created_at TIMESTAMP DEFAULT current_timestamp
            )
        """
        )
        logger.info("Created businesses table")

    @contextmanager
    def connection(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """
        Borrow a cursor for a single operation.

        The cursor is closed when the block exits, whether it raised or not.
        """
        if not self.conn:
            raise RuntimeError("DuckDB connection not initialized")

        cursor = self.conn.cursor()
        try:
            yield cursor
        finally:
            cursor.close()

    @staticmethod
    def _run(
        cursor: duckdb.DuckDBPyConnection, query: str, params: tuple
    ) -> duckdb.DuckDBPyConnection:
        if params:
            return cursor.execute(query, list(params))
        return cursor.execute(query)

    def _fetchall_sync(self, query: str, params: tuple) -> list[tuple]:
        with self.connection() as cursor:
            return self._run(cursor, query, params).fetchall()

    def _fetchone_sync(self, query: str, params: tuple) -> Optional[tuple]:
        with self.connection() as cursor:
            return self._run(cursor, query, params).fetchone()

    def _write_sync(self, statements: list[tuple[str, tuple]]) -> list[Any]:
        # Multiple statements share one cursor and one transaction.
        with self.connection() as cursor:
            cursor.execute("BEGIN TRANSACTION")
            try:
                results = [self._run(cursor, q, p).fetchall() for q, p in statements]
                cursor.execute("COMMIT")
            except Exception:
                cursor.execute("ROLLBACK")
                raise
            return results

    async def fetchall(self, query: str, params: tuple = ()) -> list[tuple]:
        """
        Execute query and fetch all results.

        Args:
            query: SQL query to execute
            params: Query parameters

        Returns:
            List of result tuples
        """
        try:
            return await asyncio.to_thread(self._fetchall_sync, query, params)
        except duckdb.Error as e:
            logger.error(f"DuckDB read error: {e}")
            raise RelationalStoreError(str(e)) from e

    async def fetchone(self, query: str, params: tuple = ()) -> Optional[tuple]:
        """
        Execute query and fetch one result.

        Args:
            query: SQL query to execute
            params: Query parameters

        Returns:
            Result tuple or None
        """
        try:
            return await asyncio.to_thread(self._fetchone_sync, query, params)
        except duckdb.Error as e:
            logger.error(f"DuckDB read error: {e}")
            raise RelationalStoreError(str(e)) from e

    async def execute_write(self, query: str, params: tuple = ()) -> list[tuple]:
        """
        Execute a write query with lock serialization.

        Args:
            query: SQL query to execute
            params: Query parameters

        Returns:
            Rows produced by the statement (e.g. from RETURNING)
        """
        results = await self.execute_many([(query, params)])
        return results[0]

    async def execute_many(self, statements: list[tuple[str, tuple]]) -> list[Any]:
        """
        Execute several write statements in one transaction.

        Args:
            statements: (query, params) pairs, run in order

        Returns:
            Rows produced by each statement
        """
        async with self._write_lock:
            try:
                return await asyncio.to_thread(self._write_sync, statements)
            except duckdb.Error as e:
                logger.error(f"DuckDB write error: {e}")
                raise RelationalStoreError(str(e)) from e

    def close(self) -> None:
        """Close DuckDB connection, flushing the WAL for persistent databases."""
        if self.conn:
            if not self._is_memory_mode:
                try:
                    self.conn.execute("CHECKPOINT")
                except duckdb.Error as e:
                    logger.warning(f"Failed to execute CHECKPOINT during close: {e}")

            try:
                self.conn.close()
                logger.info("DuckDB connection closed")
            except duckdb.Error as e:
                logger.error(f"Error closing DuckDB connection: {e}")
            finally:
                self.conn = None
                self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Check if client is initialized."""
        return self._initialized
