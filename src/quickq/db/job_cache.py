"""Local cache of previously seen jobs, used to answer searches without a remote call."""

import json
from typing import Any, Dict, List, Optional

import aiosqlite

from ..logging_config import setup_logging
from ..models.job import Job
from .base import DatabaseError, PersistenceCorruptionError, SQLiteStore

logger = setup_logging(__name__)

_LIST_COLUMNS = ("skills", "benefits", "requirements", "responsibilities")

_COLUMNS = (
    "id",
    "title",
    "company",
    "location",
    "description",
    "experience_level",
    "job_type",
    "skills",
    "posted_date",
    "company_size",
    "industry",
    "company_description",
    "benefits",
    "work_environment",
    "application_deadline",
    "company_rating",
    "interview_difficulty",
    "applicant_count",
    "hiring_urgency",
    "salary_range",
    "requirements",
    "responsibilities",
)


def _job_to_row(job: Job) -> tuple:
    data = job.model_dump(mode="json")
    for column in _LIST_COLUMNS:
        data[column] = json.dumps(data[column])
    return tuple(data[column] for column in _COLUMNS)


def _row_to_job(row: Dict[str, Any]) -> Job:
    data = {column: row[column] for column in _COLUMNS}
    for column in _LIST_COLUMNS:
        data[column] = json.loads(data[column])
    return Job.model_validate(data)


class JobCache(SQLiteStore):
    """Handles the ``jobs`` table: upsert, substring search, lookup and clear."""

    SCHEMA = (
        """
        CREATE TABLE IF NOT EXISTS jobs (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            company TEXT NOT NULL,
            location TEXT NOT NULL,
            description TEXT NOT NULL,
            experience_level TEXT NOT NULL,
            job_type TEXT NOT NULL,
            skills TEXT NOT NULL,
            posted_date TEXT,
            company_size TEXT NOT NULL,
            industry TEXT NOT NULL,
            company_description TEXT NOT NULL,
            benefits TEXT NOT NULL,
            work_environment TEXT NOT NULL,
            application_deadline TEXT,
            company_rating REAL NOT NULL,
            interview_difficulty TEXT NOT NULL,
            applicant_count INTEGER NOT NULL,
            hiring_urgency TEXT NOT NULL,
            salary_range TEXT,
            requirements TEXT NOT NULL,
            responsibilities TEXT NOT NULL,
            cached_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_jobs_company ON jobs(company)",
    )

    async def upsert_jobs(self, jobs: List[Job]) -> None:
        """Insert jobs, replacing any existing row with the same id."""
        if not jobs:
            return
        conn = await self._connection()
        placeholders = ", ".join("?" for _ in _COLUMNS)
        try:
            async with self._lock:
                await conn.executemany(
                    f"INSERT OR REPLACE INTO jobs ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                    [_job_to_row(job) for job in jobs],
                )
                await conn.commit()
            logger.info(f"Cached {len(jobs)} jobs")
        except aiosqlite.Error as e:
            logger.error(f"Error in upsert_jobs: {str(e)}")
            raise DatabaseError(f"Failed to cache jobs: {str(e)}")

    async def search(self, query: str) -> List[Job]:
        """Return jobs whose title, company or description contains ``query``.

        SQLite ``LIKE`` is case-insensitive for ASCII. Rows that no longer
        decode are skipped.
        """
        conn = await self._connection()
        try:
            async with self._lock:
                async with conn.execute(
                    """
                    SELECT * FROM jobs
                    WHERE title LIKE '%' || ? || '%'
                       OR company LIKE '%' || ? || '%'
                       OR description LIKE '%' || ? || '%'
                    """,
                    (query, query, query),
                ) as cursor:
                    rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error(f"Error in search: {str(e)}")
            raise DatabaseError(f"Failed to search cached jobs: {str(e)}")

        jobs = []
        for row in rows:
            try:
                jobs.append(_row_to_job(dict(row)))
            except ValueError as e:
                logger.warning(
                    "Skipping undecodable cached job",
                    extra={"job_id": row["id"], "error": str(e)},
                )
        return jobs

    async def get_job(self, job_id: str) -> Optional[Job]:
        conn = await self._connection()
        try:
            async with self._lock:
                async with conn.execute("SELECT * FROM jobs WHERE id = ?", (job_id,)) as cursor:
                    row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error(f"Error in get_job: {str(e)}")
            raise DatabaseError(f"Failed to read cached job: {str(e)}")

        if row is None:
            return None
        try:
            return _row_to_job(dict(row))
        except ValueError as e:
            raise PersistenceCorruptionError(f"Cached job {job_id} is corrupt: {str(e)}")

    async def clear(self) -> None:
        """Evict every cached job."""
        conn = await self._connection()
        try:
            async with self._lock:
                await conn.execute("DELETE FROM jobs")
                await conn.commit()
            logger.info("Job cache cleared")
        except aiosqlite.Error as e:
            raise DatabaseError(f"Failed to clear job cache: {str(e)}")
