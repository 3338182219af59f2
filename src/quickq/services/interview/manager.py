"""
Interview session manager.

Drives an interview through its lifecycle: question generation, answer
submission, per-question or end-of-interview feedback, and completion. The
in-progress interview is mirrored into the session store after every mutation
so a restarted process can resume it through :meth:`get_active_interview`.

Every public operation returns a :class:`Result`; nothing raises to the caller.
Persistence writes are best-effort: failures are logged and reported to the
``on_persistence_error`` hook but never fail the operation.
"""

import asyncio
import random
from typing import Callable, List, Optional
from uuid import uuid4

from ...config import Settings, settings as default_settings
from ...db.base import DatabaseError, PersistenceCorruptionError
from ...db.session_store import SessionStore
from ...logging_config import get_metrics_logger, setup_logging
from ...models.api_models import (
    FeedbackQuestion,
    FeedbackRequest,
    JobDetails,
    QuestionGenerationRequest,
)
from ...models.interview import (
    FeedbackMode,
    Interview,
    InterviewFeedback,
    InterviewQuestion,
    InterviewSummary,
    now_millis,
)
from ...models.job import Job
from ...models.result import ErrorKind, Result
from ..remote.api_client import QuickQApiClient, RemoteFailure
from ..search.orchestrator import JobSearchOrchestrator
from .difficulty import get_interview_config, pick_interviewer
from .registry import SessionRegistry

logger = setup_logging(__name__)
metrics_logger = get_metrics_logger(__name__)

INTERVIEW_NOT_FOUND = "Interview not found"
QUESTION_NOT_FOUND = "Question not found"
JOB_NOT_FOUND = "Job not found"
NO_ANSWER_PROVIDED = "No answer provided"
NO_MORE_QUESTIONS = "No more questions available"
NO_QUESTIONS_GENERATED = "No questions generated from API response"
OVERALL_FEEDBACK_PLACEHOLDER = "Failed to retrieve overall feedback."

PersistenceErrorHook = Callable[[str, Exception], None]


def _job_details(job: Job) -> JobDetails:
    return JobDetails(title=job.title, description=job.description, skills=list(job.skills))


class InterviewSessionManager:
    """Owns active interviews and their persisted mirror."""

    def __init__(
        self,
        api: QuickQApiClient,
        jobs: JobSearchOrchestrator,
        store: SessionStore,
        *,
        settings: Optional[Settings] = None,
        registry: Optional[SessionRegistry] = None,
        on_persistence_error: Optional[PersistenceErrorHook] = None,
        clock: Callable[[], int] = now_millis,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the manager.

        Args:
            api: Backend client used for questions and feedback
            jobs: Job lookup for resolving the interview's job
            store: Durable active-interview slot and history
            settings: Runtime configuration (retry count and delay)
            registry: In-memory interview registry
            on_persistence_error: Called with ``(operation, exception)`` when a write fails
            clock: Epoch-millisecond time source
            rng: Random source for interviewer selection
        """
        self._api = api
        self._jobs = jobs
        self._store = store
        self._settings = settings or default_settings
        self._registry = registry or SessionRegistry()
        self._on_persistence_error = on_persistence_error
        self._clock = clock
        self._rng = rng or random.Random()

    async def start(
        self, job_id: str, feedback_mode: FeedbackMode = FeedbackMode.END_OF_INTERVIEW
    ) -> Result[Interview]:
        """Create an interview for a cached job and make it the active one."""
        try:
            job_result = await self._jobs.get_job_detail(job_id)
            if not job_result.success:
                return Result.failure(job_result.error_message, job_result.error_kind)
            job = job_result.value
            if job is None:
                return Result.failure(JOB_NOT_FOUND, ErrorKind.NOT_FOUND)

            config = get_interview_config(job.company_rating, job.experience_level)

            try:
                response = await self._api.generate_questions(
                    QuestionGenerationRequest(job=_job_details(job))
                )
            except RemoteFailure as e:
                logger.error(f"Question generation failed: {str(e)}", extra={"job_id": job_id})
                return Result.failure(
                    f"Failed to generate questions: {str(e)}", ErrorKind.REMOTE_FAILURE
                )

            created_at = self._clock()
            questions = [
                InterviewQuestion(id=str(uuid4()), question=text.strip(), timestamp=created_at)
                for text in response.questions[: config.question_count]
            ]
            if not questions:
                return Result.failure(NO_QUESTIONS_GENERATED, ErrorKind.REMOTE_FAILURE)

            interview = Interview(
                id=str(uuid4()),
                job_id=job.id,
                interviewer_name=pick_interviewer(self._rng),
                questions=questions,
                feedback_mode=feedback_mode,
                job=job,
                config=config,
            )
            self._registry.put(interview)
            await self._persist("start", interview)

            logger.info(
                "Interview started",
                extra={
                    "interview_id": interview.id,
                    "job_id": job.id,
                    "difficulty": config.difficulty.value,
                    "question_count": len(questions),
                },
            )
            return Result.ok(interview)
        except Exception as e:
            logger.exception(f"Unexpected error starting interview: {str(e)}")
            return Result.failure(str(e), ErrorKind.INTERNAL)

    async def submit_answer(self, interview_id: str, question_id: str, answer: str) -> Result[None]:
        """Record an answer and advance the cursor. Never fetches feedback."""
        try:
            async with self._registry.lock(interview_id):
                interview = self._registry.get(interview_id)
                if interview is None:
                    return Result.failure(INTERVIEW_NOT_FOUND, ErrorKind.NOT_FOUND)
                question = interview.find_question(question_id)
                if question is None:
                    return Result.failure(QUESTION_NOT_FOUND, ErrorKind.NOT_FOUND)
                if interview.is_ready_to_complete:
                    return Result.failure(
                        "All questions have already been answered", ErrorKind.VALIDATION_FAILURE
                    )
                if question.user_answer is not None:
                    return Result.failure(
                        "Question has already been answered", ErrorKind.VALIDATION_FAILURE
                    )

                answered = question.model_copy(update={"user_answer": answer})
                updated = interview.model_copy(
                    update={
                        "questions": [answered if q.id == question_id else q for q in interview.questions],
                        "current_question_index": interview.current_question_index + 1,
                    }
                )
                self._registry.put(updated)
                await self._persist("submit_answer", updated)
            return Result.ok()
        except Exception as e:
            logger.exception(f"Unexpected error submitting answer: {str(e)}")
            return Result.failure(str(e), ErrorKind.INTERNAL)

    async def next_question(self, interview_id: str) -> Result[InterviewQuestion]:
        interview = self._registry.get(interview_id)
        if interview is None:
            return Result.failure(INTERVIEW_NOT_FOUND, ErrorKind.NOT_FOUND)
        question = interview.current_question
        if question is None:
            return Result.failure(NO_MORE_QUESTIONS, ErrorKind.VALIDATION_FAILURE)
        return Result.ok(question)

    async def get_feedback(self, interview_id: str, question_id: str) -> Result[InterviewFeedback]:
        """Fetch feedback for one answered question, with retries.

        The remote call runs outside the interview lock so submissions are not
        held up by retry delays; the feedback is attached to whatever snapshot
        is current once it arrives.
        """
        try:
            interview = self._registry.get(interview_id)
            if interview is None:
                return Result.failure(INTERVIEW_NOT_FOUND, ErrorKind.NOT_FOUND)
            question = interview.find_question(question_id)
            if question is None:
                return Result.failure(QUESTION_NOT_FOUND, ErrorKind.NOT_FOUND)
            if question.user_answer is None:
                return Result.failure(NO_ANSWER_PROVIDED, ErrorKind.VALIDATION_FAILURE)

            request = FeedbackRequest(
                job=_job_details(interview.job),
                questions=[FeedbackQuestion(question=question.question, answer=question.user_answer)],
            )
            text = await self._request_feedback(request, kind="question")
            if text is None:
                return Result.failure(
                    "Failed to generate individual feedback after "
                    f"{self._settings.feedback_max_retries} attempts.",
                    ErrorKind.REMOTE_FAILURE,
                )

            feedback = InterviewFeedback.from_text(text)
            async with self._registry.lock(interview_id):
                current = self._registry.get(interview_id)
                if current is not None:
                    updated = current.model_copy(
                        update={
                            "questions": [
                                q.model_copy(update={"feedback": feedback}) if q.id == question_id else q
                                for q in current.questions
                            ]
                        }
                    )
                    self._registry.put(updated)
                    await self._persist("get_feedback", updated)
            return Result.ok(feedback)
        except Exception as e:
            logger.exception(f"Unexpected error fetching feedback: {str(e)}")
            return Result.failure(str(e), ErrorKind.INTERNAL)

    async def complete_interview(self, interview_id: str) -> Result[InterviewSummary]:
        """Summarize the interview, archive it to history and release it.

        Running out of feedback retries does not fail completion; the summary
        carries a placeholder comment instead.
        """
        try:
            async with self._registry.lock(interview_id):
                interview = self._registry.get(interview_id)
                if interview is None:
                    return Result.failure(INTERVIEW_NOT_FOUND, ErrorKind.NOT_FOUND)

                answered = [q for q in interview.questions if q.user_answer is not None]
                request = FeedbackRequest(
                    job=_job_details(interview.job),
                    questions=[
                        FeedbackQuestion(question=q.question, answer=q.user_answer) for q in answered
                    ],
                )
                text = await self._request_feedback(request, kind="overall")
                overall = InterviewFeedback.from_text(text or OVERALL_FEEDBACK_PLACEHOLDER)

                now = self._clock()
                started_at = interview.questions[0].timestamp if interview.questions else now
                summary = InterviewSummary(
                    total_questions=len(answered),
                    average_score=0.0,
                    total_duration=now - started_at,
                    overall_feedback=overall,
                    completion_date=now,
                )

                try:
                    await self._store.append_history(summary)
                except DatabaseError as e:
                    self._report_persistence_error("append_history", e)

                self._registry.remove(interview_id)
                try:
                    await self._store.clear_active_interview()
                except DatabaseError as e:
                    self._report_persistence_error("clear_active_interview", e)

            logger.info(
                "Interview completed",
                extra={"interview_id": interview_id, "answered": len(answered)},
            )
            return Result.ok(summary)
        except Exception as e:
            logger.exception(f"Unexpected error completing interview: {str(e)}")
            return Result.failure(str(e), ErrorKind.INTERNAL)

    async def update_feedback_mode(self, interview_id: str, mode: FeedbackMode) -> Result[None]:
        try:
            async with self._registry.lock(interview_id):
                interview = self._registry.get(interview_id)
                if interview is None:
                    return Result.failure(INTERVIEW_NOT_FOUND, ErrorKind.NOT_FOUND)
                updated = interview.model_copy(update={"feedback_mode": mode})
                self._registry.put(updated)
                await self._persist("update_feedback_mode", updated)
            return Result.ok()
        except Exception as e:
            logger.exception(f"Unexpected error updating feedback mode: {str(e)}")
            return Result.failure(str(e), ErrorKind.INTERNAL)

    async def get_active_interview(self, interview_id: str) -> Optional[Interview]:
        """Return the interview from memory, or resume it from the persisted slot.

        A slot holding a different interview, or one that cannot be decoded,
        is cleared and None is returned.
        """
        interview = self._registry.get(interview_id)
        if interview is not None:
            return interview

        try:
            stored = await self._store.load_active_interview()
        except PersistenceCorruptionError as e:
            logger.warning(f"Discarding corrupt active interview: {str(e)}")
            await self._clear_slot()
            return None
        except DatabaseError as e:
            logger.error(f"Error loading active interview: {str(e)}")
            return None

        if stored is None:
            return None
        if stored.id != interview_id:
            logger.info(
                "Persisted interview does not match, clearing slot",
                extra={"requested_id": interview_id, "stored_id": stored.id},
            )
            await self._clear_slot()
            return None

        self._registry.put(stored)
        logger.info("Resumed interview from store", extra={"interview_id": interview_id})
        return stored

    async def get_interview_history(self) -> Result[List[InterviewSummary]]:
        try:
            return Result.ok(await self._store.load_history())
        except PersistenceCorruptionError as e:
            logger.warning(f"Discarding corrupt interview history: {str(e)}")
            try:
                await self._store.clear_history()
            except DatabaseError as clear_error:
                self._report_persistence_error("clear_history", clear_error)
            return Result.ok([])
        except DatabaseError as e:
            logger.error(f"Error loading interview history: {str(e)}")
            return Result.failure(str(e), ErrorKind.INTERNAL)

    async def _request_feedback(self, request: FeedbackRequest, kind: str) -> Optional[str]:
        """Ask for feedback with a fixed delay between attempts.

        Returns:
            The first non-blank feedback text, or None once attempts run out
        """
        max_attempts = self._settings.feedback_max_retries
        for attempt in range(1, max_attempts + 1):
            try:
                response = await self._api.get_feedback(request)
                if response.feedback.strip():
                    metrics_logger.info("feedback_request", kind=kind, attempts=attempt, success=True)
                    return response.feedback
                logger.warning(f"Blank {kind} feedback received (attempt {attempt})")
            except RemoteFailure as e:
                logger.warning(
                    f"Feedback API call failed (attempt {attempt}): {str(e)}",
                    extra={"status": e.status, "kind": kind},
                )

            if attempt < max_attempts:
                await asyncio.sleep(self._settings.feedback_retry_delay)

        metrics_logger.info("feedback_request", kind=kind, attempts=max_attempts, success=False)
        return None

    async def _persist(self, operation: str, interview: Interview) -> None:
        try:
            await self._store.save_active_interview(interview)
        except DatabaseError as e:
            self._report_persistence_error(operation, e)

    async def _clear_slot(self) -> None:
        try:
            await self._store.clear_active_interview()
        except DatabaseError as e:
            self._report_persistence_error("clear_active_interview", e)

    def _report_persistence_error(self, operation: str, error: Exception) -> None:
        logger.error(f"Persistence failed during {operation}: {str(error)}")
        if self._on_persistence_error is not None:
            self._on_persistence_error(operation, error)
