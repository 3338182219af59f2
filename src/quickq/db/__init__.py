"""Local persistence: job cache and session store."""

from .base import (
    DatabaseConnectionError,
    DatabaseError,
    PersistenceCorruptionError,
    SQLiteStore,
)
from .job_cache import JobCache
from .session_store import KEY_ACTIVE_INTERVIEW, KEY_INTERVIEW_HISTORY, SessionStore

__all__ = [
    "DatabaseConnectionError",
    "DatabaseError",
    "JobCache",
    "KEY_ACTIVE_INTERVIEW",
    "KEY_INTERVIEW_HISTORY",
    "PersistenceCorruptionError",
    "SQLiteStore",
    "SessionStore",
]
