"""Durable key-value storage for the active interview slot and interview history."""

import json
from typing import List, Optional

import aiosqlite
from pydantic import TypeAdapter, ValidationError

from ..logging_config import setup_logging
from ..models.interview import Interview, InterviewSummary
from .base import DatabaseError, PersistenceCorruptionError, SQLiteStore

logger = setup_logging(__name__)

KEY_ACTIVE_INTERVIEW = "active_interview"
KEY_INTERVIEW_HISTORY = "interview_history"

_history_adapter = TypeAdapter(List[InterviewSummary])


class SessionStore(SQLiteStore):
    """Preferences-style store backed by a single ``preferences`` table.

    The active interview occupies exactly one slot regardless of its id;
    saving a different interview overwrites it.
    """

    SCHEMA = (
        """
        CREATE TABLE IF NOT EXISTS preferences (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
        """,
    )

    async def get(self, key: str) -> Optional[str]:
        conn = await self._connection()
        try:
            async with self._lock:
                async with conn.execute(
                    "SELECT value FROM preferences WHERE key = ?", (key,)
                ) as cursor:
                    row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise DatabaseError(f"Failed to read {key}: {str(e)}")
        return row[0] if row else None

    async def put(self, key: str, value: str) -> None:
        conn = await self._connection()
        try:
            async with self._lock:
                await conn.execute(
                    """
                    INSERT INTO preferences (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (key, value),
                )
                await conn.commit()
        except aiosqlite.Error as e:
            raise DatabaseError(f"Failed to write {key}: {str(e)}")

    async def remove(self, key: str) -> None:
        conn = await self._connection()
        try:
            async with self._lock:
                await conn.execute("DELETE FROM preferences WHERE key = ?", (key,))
                await conn.commit()
        except aiosqlite.Error as e:
            raise DatabaseError(f"Failed to remove {key}: {str(e)}")

    # --- Active interview slot ---

    async def save_active_interview(self, interview: Interview) -> None:
        await self.put(KEY_ACTIVE_INTERVIEW, interview.model_dump_json())

    async def load_active_interview(self) -> Optional[Interview]:
        """Return the persisted interview, or None when the slot is empty.

        Raises:
            PersistenceCorruptionError: If the stored blob cannot be decoded
        """
        raw = await self.get(KEY_ACTIVE_INTERVIEW)
        if raw is None:
            return None
        try:
            return Interview.model_validate_json(raw)
        except ValidationError as e:
            raise PersistenceCorruptionError(f"Active interview is corrupt: {str(e)}")

    async def clear_active_interview(self) -> None:
        await self.remove(KEY_ACTIVE_INTERVIEW)

    # --- Interview history ---

    async def load_history(self) -> List[InterviewSummary]:
        """Return the completed-interview history, oldest first.

        Raises:
            PersistenceCorruptionError: If the stored array cannot be decoded
        """
        raw = await self.get(KEY_INTERVIEW_HISTORY)
        if raw is None:
            return []
        try:
            return _history_adapter.validate_json(raw)
        except ValidationError as e:
            raise PersistenceCorruptionError(f"Interview history is corrupt: {str(e)}")

    async def append_history(self, summary: InterviewSummary) -> None:
        """Read-modify-append-write. A corrupt history is replaced, not merged."""
        try:
            history = await self.load_history()
        except PersistenceCorruptionError as e:
            logger.warning("Discarding corrupt interview history", extra={"error": str(e)})
            history = []
        history.append(summary)
        payload = json.dumps([item.model_dump(mode="json") for item in history])
        await self.put(KEY_INTERVIEW_HISTORY, payload)

    async def clear_history(self) -> None:
        await self.remove(KEY_INTERVIEW_HISTORY)
