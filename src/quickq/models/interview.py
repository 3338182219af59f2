"""Interview session aggregate and the records produced while running it."""

import time
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .job import InterviewDifficulty, Job


def now_millis() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class FeedbackMode(str, Enum):
    AFTER_EACH_QUESTION = "AFTER_EACH_QUESTION"
    END_OF_INTERVIEW = "END_OF_INTERVIEW"


class InterviewFeedback(BaseModel):
    """Feedback for one answer or a whole interview.

    The feedback endpoint returns unstructured prose only, so ``score`` stays 0
    and the list fields stay empty; the prose lands in ``overall_comment``.
    """

    score: int = 0
    strengths: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    overall_comment: str = ""

    @classmethod
    def from_text(cls, feedback_text: str) -> "InterviewFeedback":
        return cls(overall_comment=feedback_text.strip())


class InterviewQuestion(BaseModel):
    id: str
    question: str
    user_answer: Optional[str] = None
    feedback: Optional[InterviewFeedback] = None
    timestamp: int = Field(default_factory=now_millis)


class InterviewConfig(BaseModel):
    """Shape of an interview derived from company reputation and seniority."""

    difficulty: InterviewDifficulty
    question_count: int
    # Carried for completeness; question generation does not use it.
    technical_question_ratio: float


class Interview(BaseModel):
    id: str
    job_id: str
    interviewer_name: str
    questions: List[InterviewQuestion]
    current_question_index: int = 0
    is_completed: bool = False
    feedback_mode: FeedbackMode = FeedbackMode.END_OF_INTERVIEW
    job: Job
    config: Optional[InterviewConfig] = None

    @property
    def is_ready_to_complete(self) -> bool:
        return self.current_question_index >= len(self.questions)

    @property
    def current_question(self) -> Optional[InterviewQuestion]:
        if self.current_question_index < len(self.questions):
            return self.questions[self.current_question_index]
        return None

    def find_question(self, question_id: str) -> Optional[InterviewQuestion]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


class InterviewSummary(BaseModel):
    total_questions: int
    average_score: float = 0.0
    total_duration: int  # milliseconds
    overall_feedback: InterviewFeedback
    completion_date: int = Field(default_factory=now_millis)
