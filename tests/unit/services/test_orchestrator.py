"""Test module for cache-first job search."""

import asyncio
import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from quickq.db.base import DatabaseError
from quickq.models.api_models import JobSearchResponse
from quickq.models.job import ExperienceLevel, JobFilters
from quickq.models.result import ErrorKind
from quickq.services.remote.api_client import RemoteFailure
from quickq.services.search.orchestrator import JobSearchOrchestrator


class ReversingRandom(random.Random):
    """Deterministic stand-in whose shuffle reverses the list."""

    def shuffle(self, x):
        x.reverse()


@pytest.fixture
def mock_api():
    api = MagicMock()
    api.search_jobs = AsyncMock(
        return_value=JobSearchResponse(success=True, query="", jobs=[], total=0)
    )
    return api


@pytest.fixture
def orchestrator(mock_api, job_cache, test_settings):
    return JobSearchOrchestrator(mock_api, job_cache, settings=test_settings, rng=ReversingRandom())


@pytest.fixture
def ios_jobs(make_job):
    return [
        make_job(id="junior", title="Junior iOS Developer", experience_level=ExperienceLevel.JUNIOR),
        make_job(id="mid", title="iOS Developer", experience_level=ExperienceLevel.MID),
        make_job(id="senior", title="Senior iOS Developer", experience_level=ExperienceLevel.SENIOR),
    ]


@pytest.mark.asyncio
async def test_filtered_cache_hit_skips_remote(orchestrator, mock_api, job_cache, ios_jobs):
    """Test that search('iOS', {SENIOR}) over three cached jobs returns only the senior one."""
    await job_cache.upsert_jobs(ios_jobs)

    result = await orchestrator.search("iOS", JobFilters(experience_levels={ExperienceLevel.SENIOR}))

    assert result.success
    assert [job.id for job in result.value] == ["senior"]
    mock_api.search_jobs.assert_not_awaited()


@pytest.mark.asyncio
async def test_cache_hits_are_shuffled(orchestrator, job_cache, ios_jobs):
    await job_cache.upsert_jobs(ios_jobs)
    cache_order = [job.id for job in await job_cache.search("iOS")]

    result = await orchestrator.search("iOS")

    assert [job.id for job in result.value] == list(reversed(cache_order))


@pytest.mark.asyncio
async def test_cache_miss_calls_remote_and_caches(orchestrator, mock_api, job_cache, backend_job):
    mock_api.search_jobs.return_value = JobSearchResponse(
        success=True, query="iOS", jobs=[backend_job], total=1
    )

    result = await orchestrator.search(
        "iOS",
        JobFilters(
            experience_levels={ExperienceLevel.LEAD, ExperienceLevel.SENIOR},
            skills={"UIKit", "Swift"},
        ),
    )

    assert result.success
    assert len(result.value) == 1
    request = mock_api.search_jobs.await_args.args[0]
    assert request.query == "iOS"
    assert request.tech_skills == ["Swift", "UIKit"]
    assert request.job_level == "senior"
    assert request.limit == 6
    assert await job_cache.get_job(result.value[0].id) == result.value[0]


@pytest.mark.asyncio
async def test_remote_results_are_not_filtered_locally(orchestrator, mock_api, backend_job):
    mock_api.search_jobs.return_value = JobSearchResponse(
        success=True, query="iOS", jobs=[backend_job], total=1
    )

    result = await orchestrator.search("iOS", JobFilters(experience_levels={ExperienceLevel.JUNIOR}))

    assert [job.experience_level for job in result.value] == [ExperienceLevel.SENIOR]


@pytest.mark.asyncio
async def test_remote_request_omits_empty_filters(orchestrator, mock_api):
    await orchestrator.search("React")

    request = mock_api.search_jobs.await_args.args[0]
    assert request.tech_skills is None
    assert request.job_level is None


@pytest.mark.asyncio
async def test_hung_remote_times_out(orchestrator, mock_api, hang_forever):
    """Test that search('React') with an empty cache and a hung remote fails with a connection message."""
    mock_api.search_jobs.side_effect = hang_forever

    result = await orchestrator.search("React")

    assert not result.success
    assert result.error_kind == ErrorKind.REMOTE_FAILURE
    assert result.error_message == (
        "Search request timed out. Please check your connection and try again."
    )
    assert mock_api.search_jobs.await_count == 1


@pytest.mark.asyncio
async def test_remote_failure_is_not_retried(orchestrator, mock_api):
    mock_api.search_jobs.side_effect = RemoteFailure("Internal Server Error", status=500)

    result = await orchestrator.search("React")

    assert result.error_message == "API call failed: Internal Server Error"
    assert result.error_kind == ErrorKind.REMOTE_FAILURE
    assert mock_api.search_jobs.await_count == 1


@pytest.mark.asyncio
async def test_empty_remote_list(orchestrator):
    result = await orchestrator.search("React")
    assert result.error_message == "No jobs received from API"


@pytest.mark.asyncio
async def test_no_parseable_remote_jobs(orchestrator, mock_api):
    mock_api.search_jobs.return_value = JobSearchResponse(
        success=True, query="React", jobs=[{"title": "broken"}], total=1
    )

    result = await orchestrator.search("React")

    assert result.error_message == "No valid jobs could be parsed from API response"


@pytest.mark.asyncio
async def test_unreadable_cache_falls_back_to_remote(mock_api, test_settings, backend_job):
    cache = MagicMock()
    cache.search = AsyncMock(side_effect=DatabaseError("disk I/O error"))
    cache.upsert_jobs = AsyncMock()
    mock_api.search_jobs.return_value = JobSearchResponse(
        success=True, query="iOS", jobs=[backend_job], total=1
    )
    orchestrator = JobSearchOrchestrator(mock_api, cache, settings=test_settings)

    result = await orchestrator.search("iOS")

    assert result.success
    cache.upsert_jobs.assert_awaited_once()


@pytest.mark.asyncio
async def test_newer_search_supersedes_older(orchestrator, mock_api, backend_job, hang_forever):
    calls = []

    async def search_jobs(request):
        calls.append(request.query)
        if len(calls) == 1:
            await hang_forever()
        return JobSearchResponse(success=True, query=request.query, jobs=[backend_job], total=1)

    mock_api.search_jobs.side_effect = search_jobs

    first = asyncio.create_task(orchestrator.search("React"))
    await asyncio.sleep(0.05)
    second = await orchestrator.search("Swift")
    first_result = await first

    assert second.success
    assert not first_result.success
    assert first_result.error_kind == ErrorKind.SUPERSEDED
    assert first_result.error_message == "Search superseded by a newer request"


@pytest.mark.asyncio
async def test_searches_from_different_callers_do_not_supersede(orchestrator, mock_api, backend_job):
    async def search_jobs(request):
        await asyncio.sleep(0.05)
        return JobSearchResponse(success=True, query=request.query, jobs=[backend_job], total=1)

    mock_api.search_jobs.side_effect = search_jobs

    results = await asyncio.gather(
        orchestrator.search("React", caller="home"),
        orchestrator.search("Swift", caller="search"),
    )

    assert all(result.success for result in results)


@pytest.mark.asyncio
async def test_cancel_search(orchestrator, mock_api, hang_forever):
    mock_api.search_jobs.side_effect = hang_forever

    pending = asyncio.create_task(orchestrator.search("React", caller="search"))
    await asyncio.sleep(0.05)

    assert orchestrator.cancel_search("search") is True
    result = await pending
    assert result.error_kind == ErrorKind.SUPERSEDED
    assert orchestrator.cancel_search("search") is False


@pytest.mark.asyncio
async def test_cancelling_the_caller_propagates(orchestrator, mock_api, hang_forever):
    mock_api.search_jobs.side_effect = hang_forever

    pending = asyncio.create_task(orchestrator.search("React"))
    await asyncio.sleep(0.05)
    pending.cancel()

    with pytest.raises(asyncio.CancelledError):
        await pending


@pytest.mark.asyncio
async def test_featured_jobs_use_configured_query(orchestrator, mock_api, test_settings):
    await orchestrator.get_featured_jobs()

    request = mock_api.search_jobs.await_args.args[0]
    assert request.query == test_settings.featured_jobs_query


@pytest.mark.asyncio
async def test_get_job_detail(orchestrator, job_cache, make_job):
    await job_cache.upsert_jobs([make_job()])

    first = await orchestrator.get_job_detail("job-1")
    second = await orchestrator.get_job_detail("job-1")
    missing = await orchestrator.get_job_detail("nope")

    assert first.success and first.value == second.value
    assert missing.success and missing.value is None


@pytest.mark.asyncio
async def test_get_job_detail_corrupt_row(orchestrator, job_cache, make_job):
    await job_cache.upsert_jobs([make_job()])
    conn = await job_cache._connection()
    await conn.execute("UPDATE jobs SET job_type = 'GIG' WHERE id = 'job-1'")
    await conn.commit()

    result = await orchestrator.get_job_detail("job-1")

    assert result.error_kind == ErrorKind.PERSISTENCE_CORRUPTION


@pytest.mark.asyncio
async def test_clear_cache(orchestrator, job_cache, make_job):
    await job_cache.upsert_jobs([make_job()])

    result = await orchestrator.clear_cache()

    assert result.success
    assert await job_cache.get_job("job-1") is None
