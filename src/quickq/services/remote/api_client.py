"""
QuickQ backend client.

Thin typed wrapper over the three backend calls: job search, question
generation and feedback generation. No retries or caching happen here; any
transport, HTTP or protocol problem surfaces as :class:`RemoteFailure`.
"""

import asyncio
import time
from typing import Optional, Type, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from ...config import Settings, settings as default_settings
from ...logging_config import get_metrics_logger, setup_logging
from ...models.api_models import (
    FeedbackRequest,
    FeedbackResponse,
    JobSearchRequest,
    JobSearchResponse,
    QuestionGenerationRequest,
    QuestionGenerationResponse,
)

logger = setup_logging(__name__)
metrics_logger = get_metrics_logger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class RemoteFailure(Exception):
    """Raised when a backend call fails for any reason."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class QuickQApiClient:
    """Async client for the QuickQ backend.

    Use as an async context manager, or call :meth:`start` / :meth:`close`::

        async with QuickQApiClient() as api:
            response = await api.search_jobs(JobSearchRequest(query="React"))
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Backend root; defaults to ``settings.api_base_url``
            settings: Runtime configuration
            session: Externally owned session; it is not closed by :meth:`close`
        """
        self._settings = settings or default_settings
        self.base_url = (base_url or self._settings.api_base_url).rstrip("/") + "/"
        self._session = session
        self._owns_session = session is None

    async def start(self) -> "QuickQApiClient":
        if self._session is None:
            timeout = aiohttp.ClientTimeout(
                total=None,
                sock_connect=self._settings.connect_timeout,
                sock_read=self._settings.read_timeout,
            )
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "QuickQApiClient":
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def search_jobs(self, request: JobSearchRequest) -> JobSearchResponse:
        """``POST /jobs``"""
        return await self._post("jobs", request, JobSearchResponse)

    async def generate_questions(
        self, request: QuestionGenerationRequest
    ) -> QuestionGenerationResponse:
        """``POST /questions``"""
        return await self._post("questions", request, QuestionGenerationResponse)

    async def get_feedback(self, request: FeedbackRequest) -> FeedbackResponse:
        """``POST /feedback``"""
        return await self._post("feedback", request, FeedbackResponse)

    async def _post(
        self, path: str, request: BaseModel, response_model: Type[ResponseModel]
    ) -> ResponseModel:
        if self._session is None:
            await self.start()

        url = self.base_url + path
        payload = request.model_dump(mode="json", exclude_none=True)
        started = time.monotonic()
        logger.debug(f"POST {url}", extra={"payload": payload})

        try:
            async with self._session.post(url, json=payload) as response:
                raw_body = await response.read()
                status = response.status
        except asyncio.TimeoutError:
            raise RemoteFailure(f"Request to /{path} timed out")
        except aiohttp.ClientError as e:
            raise RemoteFailure(f"Connection error on /{path}: {str(e)}")
        finally:
            metrics_logger.info(
                "remote_call",
                path=path,
                elapsed_ms=int((time.monotonic() - started) * 1000),
            )

        if not 200 <= status < 300:
            body = raw_body.decode("utf-8", errors="replace")
            logger.error(
                f"API call to /{path} failed",
                extra={"status": status, "body": body[:500]},
            )
            raise RemoteFailure(body or "Unknown API error", status=status)

        try:
            body = raw_body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RemoteFailure(f"Malformed response from /{path}: {str(e)}", status=status)

        if not body.strip():
            raise RemoteFailure(f"Empty response body from /{path}", status=status)

        try:
            parsed = response_model.model_validate_json(body)
        except ValidationError as e:
            raise RemoteFailure(f"Malformed response from /{path}: {str(e)}", status=status)

        if not parsed.success:
            raise RemoteFailure(f"Backend reported failure on /{path}", status=status)

        return parsed
