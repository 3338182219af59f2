"""Turn backend job payloads into domain :class:`Job` records."""

from typing import Any, Dict, List
from uuid import uuid4

from pydantic import ValidationError

from ...logging_config import setup_logging
from ...models.api_models import JobPayload
from ...models.job import (
    CompanySize,
    ExperienceLevel,
    HiringUrgency,
    InterviewDifficulty,
    Job,
    JobType,
    WorkEnvironment,
)
from ...utils.reputation import get_company_rating

logger = setup_logging(__name__)

# Free-text job_level -> ExperienceLevel; anything else maps to MID.
EXPERIENCE_LEVEL_MAP: Dict[str, ExperienceLevel] = {
    "entry": ExperienceLevel.JUNIOR,
    "junior": ExperienceLevel.JUNIOR,
    "mid": ExperienceLevel.MID,
    "senior": ExperienceLevel.SENIOR,
    "lead": ExperienceLevel.LEAD,
    "principal": ExperienceLevel.PRINCIPAL,
}

# Free-text job_type -> JobType; anything else maps to FULL_TIME.
JOB_TYPE_MAP: Dict[str, JobType] = {
    "remote": JobType.REMOTE,
    "full-time": JobType.FULL_TIME,
    "part-time": JobType.PART_TIME,
    "contract": JobType.CONTRACT,
    "internship": JobType.INTERNSHIP,
    "onsite": JobType.ON_SITE,
}

# The backend has no work-environment field; it is inferred from job_type.
WORK_ENVIRONMENT_MAP: Dict[str, WorkEnvironment] = {
    "remote": WorkEnvironment.REMOTE,
    "onsite": WorkEnvironment.ON_SITE,
}


def payload_to_job(payload: JobPayload) -> Job:
    job_type_key = payload.job_type.lower()
    return Job(
        id=str(uuid4()),
        title=payload.title,
        company=payload.company,
        location=payload.location,
        description=payload.description,
        skills=list(payload.skills),
        experience_level=EXPERIENCE_LEVEL_MAP.get(payload.job_level.lower(), ExperienceLevel.MID),
        job_type=JOB_TYPE_MAP.get(job_type_key, JobType.FULL_TIME),
        work_environment=WORK_ENVIRONMENT_MAP.get(job_type_key, WorkEnvironment.HYBRID),
        company_size=CompanySize.MEDIUM,
        industry="Technology",
        company_rating=get_company_rating(payload.company),
        salary_range=None,
        applicant_count=0,
        posted_date=payload.first_seen,
        interview_difficulty=InterviewDifficulty.MODERATE,
        hiring_urgency=HiringUrgency.MODERATE,
    )


def parse_jobs(raw_jobs: List[Dict[str, Any]]) -> List[Job]:
    """Parse every payload that validates; malformed ones are dropped."""
    jobs = []
    for raw in raw_jobs:
        try:
            jobs.append(payload_to_job(JobPayload.model_validate(raw)))
        except ValidationError as e:
            logger.warning("Dropping unparseable job from search response", extra={"error": str(e)})
    return jobs
