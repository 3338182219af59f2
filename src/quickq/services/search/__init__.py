from .filters import apply_filters, matches_filters, parse_salary_range
from .job_mapper import parse_jobs, payload_to_job
from .orchestrator import JobSearchOrchestrator

__all__ = [
    "JobSearchOrchestrator",
    "apply_filters",
    "matches_filters",
    "parse_jobs",
    "parse_salary_range",
    "payload_to_job",
]
