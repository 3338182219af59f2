"""Shared aiosqlite plumbing for the local job cache and session store."""

import asyncio
import os
from typing import Optional, Sequence

import aiosqlite

from ..logging_config import setup_logging

logger = setup_logging(__name__)

BUSY_TIMEOUT_MS = 5000


class DatabaseError(Exception):
    """Custom exception for database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Exception raised when database connection fails."""

    pass


class PersistenceCorruptionError(DatabaseError):
    """Exception raised when locally stored data cannot be decoded."""

    pass


class SQLiteStore:
    """Owns a single aiosqlite connection and bootstraps its schema.

    Subclasses list their DDL in ``SCHEMA``. Callers can do::

        store = await JobCache(path).ainit()

    Operations are serialized on ``self._lock`` so two coroutines never
    interleave statements inside one transaction.
    """

    SCHEMA: Sequence[str] = ()

    def __init__(self, db_path: str):
        """Initialize the store handle.

        Args:
            db_path: Path to the SQLite file, or ``:memory:``
        """
        self.db_path = db_path
        self._conn: Optional[aiosqlite.Connection] = None
        self._lock = asyncio.Lock()

        db_dirname = os.path.dirname(self.db_path)
        if self.db_path != ":memory:" and db_dirname:
            os.makedirs(db_dirname, exist_ok=True)

        logger.info(f"Database handle created for: {self.db_path}")

    async def ainit(self):
        """Open the connection and create tables. Safe to call repeatedly."""
        async with self._lock:
            if self._conn is not None:
                return self
            try:
                conn = await aiosqlite.connect(self.db_path)
                conn.row_factory = aiosqlite.Row
                await conn.execute(f"PRAGMA busy_timeout = {BUSY_TIMEOUT_MS}")
                for statement in self.SCHEMA:
                    await conn.execute(statement)
                await conn.commit()
            except (aiosqlite.Error, OSError) as e:
                logger.error(f"Failed to initialize database: {str(e)}")
                raise DatabaseConnectionError(f"Failed to initialize database: {str(e)}")
            self._conn = conn
            logger.info(f"Database initialized: {self.db_path}")
        return self

    async def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            await self.ainit()
        return self._conn

    async def check_connection(self) -> bool:
        """Check if the database connection is working."""
        try:
            conn = await self._connection()
            async with self._lock:
                async with conn.execute("SELECT 1") as cursor:
                    await cursor.fetchone()
            return True
        except (aiosqlite.Error, DatabaseError):
            return False

    async def close(self) -> None:
        """Close the database connection."""
        async with self._lock:
            if self._conn is not None:
                await self._conn.close()
                self._conn = None
