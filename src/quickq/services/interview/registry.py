"""In-memory registry of active interviews."""

import asyncio
from typing import Dict, Optional

from ...models.interview import Interview


class SessionRegistry:
    """Active interviews keyed by id, each guarded by its own lock.

    The registry holds the current snapshot of every interview; callers
    replace snapshots with :meth:`put` rather than mutating them in place.
    """

    def __init__(self):
        self._sessions: Dict[str, Interview] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def get(self, interview_id: str) -> Optional[Interview]:
        return self._sessions.get(interview_id)

    def put(self, interview: Interview) -> None:
        self._sessions[interview.id] = interview

    def remove(self, interview_id: str) -> Optional[Interview]:
        self._locks.pop(interview_id, None)
        return self._sessions.pop(interview_id, None)

    def lock(self, interview_id: str) -> asyncio.Lock:
        """Return the lock serializing mutations of ``interview_id``.

        Unknown ids get a throwaway lock that is not retained, so lookups
        for missing interviews leave nothing behind.
        """
        if interview_id not in self._sessions:
            return asyncio.Lock()
        return self._locks.setdefault(interview_id, asyncio.Lock())

    def __contains__(self, interview_id: str) -> bool:
        return interview_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
