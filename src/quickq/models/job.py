"""Job records and the search filters applied to them."""

from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field


class ExperienceLevel(str, Enum):
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"
    LEAD = "LEAD"
    PRINCIPAL = "PRINCIPAL"

    @property
    def display_name(self) -> str:
        return _EXPERIENCE_DISPLAY_NAMES[self]


_EXPERIENCE_DISPLAY_NAMES = {
    ExperienceLevel.JUNIOR: "Junior",
    ExperienceLevel.MID: "Mid-level",
    ExperienceLevel.SENIOR: "Senior",
    ExperienceLevel.LEAD: "Lead",
    ExperienceLevel.PRINCIPAL: "Principal",
}


class JobType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"
    REMOTE = "REMOTE"
    ON_SITE = "ON_SITE"


class CompanySize(str, Enum):
    STARTUP = "STARTUP"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    ENTERPRISE = "ENTERPRISE"


class WorkEnvironment(str, Enum):
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"
    ON_SITE = "ON_SITE"


class InterviewDifficulty(str, Enum):
    EASY = "EASY"
    MODERATE = "MODERATE"
    CHALLENGING = "CHALLENGING"
    VERY_HARD = "VERY_HARD"
    EXTREME = "EXTREME"


class HiringUrgency(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    URGENT = "URGENT"


class SalaryRange(str, Enum):
    """Salary buckets offered as filters. ``max_salary`` of None is unbounded."""

    ENTRY_LEVEL = "ENTRY_LEVEL"
    MID_LEVEL = "MID_LEVEL"
    SENIOR_LEVEL = "SENIOR_LEVEL"
    LEAD_LEVEL = "LEAD_LEVEL"
    EXECUTIVE_LEVEL = "EXECUTIVE_LEVEL"

    @property
    def display_name(self) -> str:
        return _SALARY_BOUNDS[self][0]

    @property
    def min_salary(self) -> int:
        return _SALARY_BOUNDS[self][1]

    @property
    def max_salary(self) -> Optional[int]:
        return _SALARY_BOUNDS[self][2]


_SALARY_BOUNDS = {
    SalaryRange.ENTRY_LEVEL: ("$40K - $70K", 40000, 70000),
    SalaryRange.MID_LEVEL: ("$70K - $120K", 70000, 120000),
    SalaryRange.SENIOR_LEVEL: ("$120K - $180K", 120000, 180000),
    SalaryRange.LEAD_LEVEL: ("$180K - $250K", 180000, 250000),
    SalaryRange.EXECUTIVE_LEVEL: ("$250K+", 250000, None),
}


class Job(BaseModel):
    """A job posting as seen by the client, either from search or from the cache."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    company: str
    location: str
    description: str
    skills: List[str] = Field(default_factory=list)
    experience_level: ExperienceLevel = ExperienceLevel.MID
    job_type: JobType = JobType.FULL_TIME
    work_environment: WorkEnvironment = WorkEnvironment.HYBRID
    company_size: CompanySize = CompanySize.MEDIUM
    industry: str = "Technology"
    company_rating: float = Field(default=3.5, ge=1.0, le=5.0)
    salary_range: Optional[str] = None
    applicant_count: int = 0
    posted_date: Optional[str] = None
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    company_description: str = ""
    application_deadline: Optional[str] = None
    interview_difficulty: InterviewDifficulty = InterviewDifficulty.MODERATE
    hiring_urgency: HiringUrgency = HiringUrgency.MODERATE


class JobFilters(BaseModel):
    """Set-valued search constraints; an empty set places no constraint."""

    experience_levels: Set[ExperienceLevel] = Field(default_factory=set)
    job_types: Set[JobType] = Field(default_factory=set)
    work_environments: Set[WorkEnvironment] = Field(default_factory=set)
    company_sizes: Set[CompanySize] = Field(default_factory=set)
    locations: Set[str] = Field(default_factory=set)
    salary_ranges: Set[SalaryRange] = Field(default_factory=set)
    industries: Set[str] = Field(default_factory=set)
    skills: Set[str] = Field(default_factory=set)

    def is_empty(self) -> bool:
        return not (
            self.experience_levels
            or self.job_types
            or self.work_environments
            or self.company_sizes
            or self.locations
            or self.salary_ranges
            or self.industries
            or self.skills
        )
