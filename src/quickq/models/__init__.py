"""
Data models and schemas for the QuickQ session core.
"""

from .api_models import (
    FeedbackQuestion,
    FeedbackRequest,
    FeedbackResponse,
    JobDetails,
    JobPayload,
    JobSearchRequest,
    JobSearchResponse,
    QuestionGenerationRequest,
    QuestionGenerationResponse,
)
from .interview import (
    FeedbackMode,
    Interview,
    InterviewConfig,
    InterviewFeedback,
    InterviewQuestion,
    InterviewSummary,
    now_millis,
)
from .job import (
    CompanySize,
    ExperienceLevel,
    HiringUrgency,
    InterviewDifficulty,
    Job,
    JobFilters,
    JobType,
    SalaryRange,
    WorkEnvironment,
)
from .result import ErrorKind, Result, ResultError

__all__ = [
    "CompanySize",
    "ErrorKind",
    "ExperienceLevel",
    "FeedbackMode",
    "FeedbackQuestion",
    "FeedbackRequest",
    "FeedbackResponse",
    "HiringUrgency",
    "Interview",
    "InterviewConfig",
    "InterviewDifficulty",
    "InterviewFeedback",
    "InterviewQuestion",
    "InterviewSummary",
    "Job",
    "JobDetails",
    "JobFilters",
    "JobPayload",
    "JobSearchRequest",
    "JobSearchResponse",
    "JobType",
    "QuestionGenerationRequest",
    "QuestionGenerationResponse",
    "Result",
    "ResultError",
    "SalaryRange",
    "WorkEnvironment",
    "now_millis",
]
