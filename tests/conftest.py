"""Test configuration and fixtures."""

import asyncio
import os
from typing import Any, Dict, List, Tuple, Union

os.environ.setdefault("LOG_DIR", "test_logs")

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from quickq.config import Settings
from quickq.db.job_cache import JobCache
from quickq.db.session_store import SessionStore
from quickq.models.job import Job
from quickq.services.remote.api_client import QuickQApiClient

Reply = Tuple[int, Union[Dict[str, Any], str, bytes]]


class FakeBackend:
    """In-process stand-in for the QuickQ backend.

    Each endpoint replies from a queue of ``(status, payload)`` pairs; the last
    reply repeats once the queue is down to one entry. Dict payloads are sent
    as JSON, strings as plain text, bytes verbatim. Request bodies are recorded per endpoint.
    """

    def __init__(self):
        self.base_url = ""
        self.calls: Dict[str, List[Dict[str, Any]]] = {"jobs": [], "questions": [], "feedback": []}
        self.replies: Dict[str, List[Reply]] = {
            "jobs": [(200, {"success": True, "query": "", "jobs": [], "total": 0, "ai_generated": False})],
            "questions": [(200, {"success": True, "job_title": "", "questions": [], "total": 0})],
            "feedback": [(200, {"success": True, "job_title": "", "feedback": "Solid answers."})],
        }

    def reply(self, endpoint: str, *replies: Reply) -> None:
        self.replies[endpoint] = list(replies)

    def make_app(self) -> web.Application:
        app = web.Application()
        for endpoint in self.calls:
            app.router.add_post(f"/{endpoint}", self._handle)
        return app

    async def _handle(self, request: web.Request) -> web.Response:
        endpoint = request.path.strip("/")
        self.calls[endpoint].append(await request.json())
        queue = self.replies[endpoint]
        status, payload = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(payload, bytes):
            return web.Response(status=status, body=payload, content_type="application/json")
        if isinstance(payload, str):
            return web.Response(status=status, text=payload)
        return web.json_response(payload, status=status)


@pytest.fixture
def test_settings(tmp_path):
    """Settings with no retry delay and short timeouts."""
    return Settings(
        search_timeout_seconds=0.5,
        feedback_retry_delay=0.0,
        job_cache_path=str(tmp_path / "job_cache.db"),
        session_store_path=str(tmp_path / "session_store.db"),
    )


@pytest.fixture
def make_job():
    """Factory for Job records with sensible defaults."""

    def _make_job(**overrides) -> Job:
        data = {
            "id": "job-1",
            "title": "Software Engineer",
            "company": "Acme",
            "location": "Remote",
            "description": "Build things",
            "skills": ["Python"],
        }
        data.update(overrides)
        return Job(**data)

    return _make_job


@pytest.fixture
def backend_job():
    """One job as the backend returns it."""
    return {
        "title": "Senior iOS Engineer",
        "company": "Google",
        "description": "Build the iOS app",
        "location": "Mountain View, CA",
        "job_type": "full-time",
        "job_level": "senior",
        "job_link": "https://example.com/jobs/1",
        "skills": ["Swift", "UIKit"],
        "first_seen": "2024-05-01",
    }


@pytest_asyncio.fixture
async def job_cache():
    cache = await JobCache(":memory:").ainit()
    yield cache
    await cache.close()


@pytest_asyncio.fixture
async def session_store():
    store = await SessionStore(":memory:").ainit()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def fake_backend():
    backend = FakeBackend()
    server = TestServer(backend.make_app())
    await server.start_server()
    backend.base_url = str(server.make_url("/"))
    yield backend
    await server.close()


@pytest_asyncio.fixture
async def api_client(fake_backend, test_settings):
    async with QuickQApiClient(fake_backend.base_url, settings=test_settings) as api:
        yield api


@pytest.fixture
def hang_forever():
    """Stand-in for a remote call that never answers."""

    async def _hang(*args, **kwargs):
        await asyncio.Event().wait()

    return _hang
