#!/usr/bin/env python3
"""
QuickQ Session API

Local JSON API through which the presentation layer drives job search and
interview sessions. Every route delegates to the search orchestrator or the
interview session manager and maps failed results onto HTTP errors.
"""

from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ...config import settings
from ...db.job_cache import JobCache
from ...db.session_store import SessionStore
from ...logging_config import setup_logging
from ...models.interview import (
    FeedbackMode,
    Interview,
    InterviewFeedback,
    InterviewQuestion,
    InterviewSummary,
)
from ...models.job import Job, JobFilters
from ...models.result import ErrorKind, Result
from ..interview.manager import INTERVIEW_NOT_FOUND, JOB_NOT_FOUND, InterviewSessionManager
from ..remote.api_client import QuickQApiClient
from ..search.orchestrator import DEFAULT_CALLER, JobSearchOrchestrator

# Load environment variables
load_dotenv()

logger = setup_logging(__name__)

ERROR_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_FAILURE: 400,
    ErrorKind.SUPERSEDED: 409,
    ErrorKind.REMOTE_FAILURE: 502,
}


class SearchRequest(BaseModel):
    query: str
    filters: JobFilters = Field(default_factory=JobFilters)
    caller: str = DEFAULT_CALLER


class StartInterviewRequest(BaseModel):
    job_id: str
    feedback_mode: FeedbackMode = FeedbackMode.END_OF_INTERVIEW


class AnswerRequest(BaseModel):
    question_id: str
    answer: str


class FeedbackModeRequest(BaseModel):
    mode: FeedbackMode


def unwrap_result(result: Result):
    """Return the result's value or raise the matching HTTPException."""
    if result.success:
        return result.value
    status_code = ERROR_STATUS_CODES.get(result.error_kind, 500)
    raise HTTPException(status_code=status_code, detail=result.error_message)


def get_orchestrator(request: Request) -> JobSearchOrchestrator:
    return request.app.state.orchestrator


def get_manager(request: Request) -> InterviewSessionManager:
    return request.app.state.manager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the backend client and local stores, wire the services."""
    api = await QuickQApiClient(settings=settings).start()
    cache = await JobCache(settings.job_cache_path).ainit()
    store = await SessionStore(settings.session_store_path).ainit()

    orchestrator = JobSearchOrchestrator(api, cache, settings=settings)
    app.state.api = api
    app.state.cache = cache
    app.state.store = store
    app.state.orchestrator = orchestrator
    app.state.manager = InterviewSessionManager(api, orchestrator, store, settings=settings)
    logger.info("Session API started", extra={"api_base_url": api.base_url})
    try:
        yield
    finally:
        await api.close()
        await cache.close()
        await store.close()
        logger.info("Session API stopped")


app = FastAPI(
    title="QuickQ Session API",
    description="Local API for job search and mock interview sessions",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check(request: Request):
    """Report whether the local stores are reachable."""
    try:
        cache_ok = await request.app.state.cache.check_connection()
        store_ok = await request.app.state.store.check_connection()
        status = "healthy" if cache_ok and store_ok else "unhealthy"
        return {
            "status": status,
            "job_cache": "connected" if cache_ok else "disconnected",
            "session_store": "connected" if store_ok else "disconnected",
        }
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}


# --- Jobs ---


@app.post("/jobs/search", response_model=List[Job])
async def search_jobs(body: SearchRequest, request: Request):
    result = await get_orchestrator(request).search(body.query, body.filters, caller=body.caller)
    return unwrap_result(result)


@app.get("/jobs/featured", response_model=List[Job])
async def featured_jobs(request: Request):
    return unwrap_result(await get_orchestrator(request).get_featured_jobs())


@app.get("/jobs/{job_id}", response_model=Job)
async def job_detail(job_id: str, request: Request):
    job = unwrap_result(await get_orchestrator(request).get_job_detail(job_id))
    if job is None:
        raise HTTPException(status_code=404, detail=JOB_NOT_FOUND)
    return job


# --- Interviews ---


@app.post("/interviews", response_model=Interview)
async def start_interview(body: StartInterviewRequest, request: Request):
    result = await get_manager(request).start(body.job_id, body.feedback_mode)
    return unwrap_result(result)


@app.get("/interviews/history", response_model=List[InterviewSummary])
async def interview_history(request: Request):
    return unwrap_result(await get_manager(request).get_interview_history())


@app.get("/interviews/{interview_id}", response_model=Interview)
async def get_interview(interview_id: str, request: Request):
    interview: Optional[Interview] = await get_manager(request).get_active_interview(interview_id)
    if interview is None:
        raise HTTPException(status_code=404, detail=INTERVIEW_NOT_FOUND)
    return interview


@app.get("/interviews/{interview_id}/next-question", response_model=InterviewQuestion)
async def next_question(interview_id: str, request: Request):
    return unwrap_result(await get_manager(request).next_question(interview_id))


@app.post("/interviews/{interview_id}/answers")
async def submit_answer(interview_id: str, body: AnswerRequest, request: Request):
    result = await get_manager(request).submit_answer(interview_id, body.question_id, body.answer)
    unwrap_result(result)
    return {"status": "ok"}


@app.put("/interviews/{interview_id}/feedback-mode")
async def update_feedback_mode(interview_id: str, body: FeedbackModeRequest, request: Request):
    unwrap_result(await get_manager(request).update_feedback_mode(interview_id, body.mode))
    return {"status": "ok"}


@app.post(
    "/interviews/{interview_id}/questions/{question_id}/feedback",
    response_model=InterviewFeedback,
)
async def question_feedback(interview_id: str, question_id: str, request: Request):
    return unwrap_result(await get_manager(request).get_feedback(interview_id, question_id))


@app.post("/interviews/{interview_id}/complete", response_model=InterviewSummary)
async def complete_interview(interview_id: str, request: Request):
    return unwrap_result(await get_manager(request).complete_interview(interview_id))


def main():
    uvicorn.run(
        "quickq.services.session_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
