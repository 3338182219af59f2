"""
Wire models for the QuickQ backend (``/jobs``, ``/questions``, ``/feedback``).
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class JobSearchRequest(BaseModel):
    """Body of ``POST /jobs``."""
    query: str
    tech_skills: Optional[List[str]] = None
    job_level: Optional[str] = None
    limit: int = 6


class JobPayload(BaseModel):
    """One job as the backend describes it. No stable id is supplied."""
    title: str
    company: str
    description: str
    location: str
    job_type: str
    job_level: str
    job_link: Optional[str] = None
    skills: List[str]
    first_seen: Optional[str] = None


class JobSearchResponse(BaseModel):
    success: bool
    query: str = ""
    # Kept raw so one malformed job does not reject the whole response
    jobs: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    ai_generated: bool = False


class JobDetails(BaseModel):
    """Job context sent along with question and feedback requests."""
    title: str
    description: str
    skills: List[str]


class QuestionGenerationRequest(BaseModel):
    job: JobDetails


class QuestionGenerationResponse(BaseModel):
    success: bool
    job_title: str = ""
    questions: List[str] = Field(default_factory=list)
    total: int = 0


class FeedbackQuestion(BaseModel):
    question: str
    answer: str


class FeedbackRequest(BaseModel):
    job: JobDetails
    questions: List[FeedbackQuestion]


class FeedbackResponse(BaseModel):
    success: bool
    job_title: str = ""
    feedback: str = ""
