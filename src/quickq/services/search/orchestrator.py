"""
Job search orchestration.

Serves searches from the local job cache when the cached, filtered result set
is non-empty and falls back to the remote backend otherwise. Remote results
are cached for later searches and lookups.
"""

import asyncio
import random
import time
from typing import Dict, List, Optional, Set

from ...config import Settings, settings as default_settings
from ...db.base import DatabaseError, PersistenceCorruptionError
from ...db.job_cache import JobCache
from ...logging_config import get_metrics_logger, setup_logging
from ...models.api_models import JobSearchRequest
from ...models.job import Job, JobFilters
from ...models.result import ErrorKind, Result
from ..remote.api_client import QuickQApiClient, RemoteFailure
from .filters import apply_filters, primary_experience_level
from .job_mapper import parse_jobs

logger = setup_logging(__name__)
metrics_logger = get_metrics_logger(__name__)

SEARCH_TIMEOUT_MESSAGE = "Search request timed out. Please check your connection and try again."
SEARCH_SUPERSEDED_MESSAGE = "Search superseded by a newer request"
NO_JOBS_RECEIVED_MESSAGE = "No jobs received from API"
NO_VALID_JOBS_MESSAGE = "No valid jobs could be parsed from API response"

DEFAULT_CALLER = "default"


class JobSearchOrchestrator:
    """Cache-first job search with per-caller supersede.

    Each ``caller`` key has at most one search in flight. Starting another
    search for the same caller cancels the previous one, whose awaiter gets a
    ``SUPERSEDED`` failure instead of an exception.
    """

    def __init__(
        self,
        api: QuickQApiClient,
        cache: JobCache,
        *,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self._api = api
        self._cache = cache
        self._settings = settings or default_settings
        self._rng = rng or random.Random()
        self._inflight: Dict[str, asyncio.Task] = {}
        self._superseded: Set[asyncio.Task] = set()

    async def search(
        self,
        query: str,
        filters: Optional[JobFilters] = None,
        caller: str = DEFAULT_CALLER,
    ) -> Result[List[Job]]:
        """Search for jobs matching ``query`` and ``filters``.

        Args:
            query: Free-text query matched against title, company and description
            filters: Optional constraints; ``None`` means no filtering
            caller: Supersede key; a newer search with the same key cancels this one

        Returns:
            Result holding the jobs, or a failure describing why none are available
        """
        filters = filters or JobFilters()
        self.cancel_search(caller)

        task = asyncio.ensure_future(self._run_search(query, filters))
        self._inflight[caller] = task
        try:
            return await task
        except asyncio.CancelledError:
            if task in self._superseded:
                self._superseded.discard(task)
                logger.info("Search superseded", extra={"query": query, "caller": caller})
                return Result.failure(SEARCH_SUPERSEDED_MESSAGE, ErrorKind.SUPERSEDED)
            raise
        finally:
            if self._inflight.get(caller) is task:
                del self._inflight[caller]

    def cancel_search(self, caller: str = DEFAULT_CALLER) -> bool:
        """Cancel the caller's in-flight search, if any. Returns True if one was cancelled."""
        previous = self._inflight.pop(caller, None)
        if previous is None or previous.done():
            return False
        self._superseded.add(previous)
        previous.cancel()
        return True

    async def get_featured_jobs(self) -> Result[List[Job]]:
        return await self.search(self._settings.featured_jobs_query, JobFilters())

    async def get_job_detail(self, job_id: str) -> Result[Optional[Job]]:
        """Cache-only lookup. An unknown id is a success holding None."""
        try:
            return Result.ok(await self._cache.get_job(job_id))
        except PersistenceCorruptionError as e:
            logger.error(f"Corrupt cached job: {str(e)}", extra={"job_id": job_id})
            return Result.failure(str(e), ErrorKind.PERSISTENCE_CORRUPTION)
        except DatabaseError as e:
            logger.error(f"Error reading cached job: {str(e)}", extra={"job_id": job_id})
            return Result.failure(str(e), ErrorKind.INTERNAL)

    async def clear_cache(self) -> Result[None]:
        try:
            await self._cache.clear()
            return Result.ok()
        except DatabaseError as e:
            logger.error(f"Error clearing job cache: {str(e)}")
            return Result.failure(str(e), ErrorKind.INTERNAL)

    async def _run_search(self, query: str, filters: JobFilters) -> Result[List[Job]]:
        started = time.monotonic()
        try:
            cached = await self._search_cache(query, filters)
            if cached:
                self._rng.shuffle(cached)
                metrics_logger.info(
                    "job_search",
                    path="cache",
                    results=len(cached),
                    elapsed_ms=int((time.monotonic() - started) * 1000),
                )
                return Result.ok(cached)

            result = await self._search_remote(query, filters)
            metrics_logger.info(
                "job_search",
                path="remote",
                success=result.success,
                results=len(result.value or []),
                elapsed_ms=int((time.monotonic() - started) * 1000),
            )
            return result
        except Exception as e:
            logger.exception(f"Unexpected error during job search: {str(e)}")
            return Result.failure(f"Search failed: {str(e)}", ErrorKind.INTERNAL)

    async def _search_cache(self, query: str, filters: JobFilters) -> List[Job]:
        try:
            hits = await self._cache.search(query)
        except DatabaseError as e:
            # An unreadable cache behaves like an empty one
            logger.warning(f"Job cache search failed: {str(e)}", extra={"query": query})
            return []
        return apply_filters(hits, filters)

    async def _search_remote(self, query: str, filters: JobFilters) -> Result[List[Job]]:
        level = primary_experience_level(filters)
        request = JobSearchRequest(
            query=query,
            tech_skills=sorted(filters.skills) or None,
            job_level=level.value.lower() if level else None,
            limit=self._settings.search_result_limit,
        )

        try:
            response = await asyncio.wait_for(
                self._api.search_jobs(request),
                timeout=self._settings.search_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("Job search timed out", extra={"query": query})
            return Result.failure(SEARCH_TIMEOUT_MESSAGE, ErrorKind.REMOTE_FAILURE)
        except RemoteFailure as e:
            logger.error(f"Job search API call failed: {str(e)}", extra={"status": e.status})
            return Result.failure(f"API call failed: {str(e)}", ErrorKind.REMOTE_FAILURE)

        if not response.jobs:
            return Result.failure(NO_JOBS_RECEIVED_MESSAGE, ErrorKind.REMOTE_FAILURE)

        jobs = parse_jobs(response.jobs)
        if not jobs:
            return Result.failure(NO_VALID_JOBS_MESSAGE, ErrorKind.REMOTE_FAILURE)

        try:
            await self._cache.upsert_jobs(jobs)
        except DatabaseError as e:
            logger.warning(f"Failed to cache remote jobs: {str(e)}")

        logger.info(f"Fetched {len(jobs)} jobs from API", extra={"query": query})
        return Result.ok(jobs)
