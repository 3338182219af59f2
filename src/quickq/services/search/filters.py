"""Apply :class:`JobFilters` to cached jobs.

A job passes when every non-empty filter category matches (AND across
categories) and, within a category, at least one value matches (OR within).
"""

import re
from typing import Iterable, List, Optional, Tuple

from ...models.job import ExperienceLevel, Job, JobFilters, SalaryRange

_NON_DIGITS = re.compile(r"\D")


def parse_salary_range(salary: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse ``"<min>-<max>"`` keeping only the digits of the first two sides.

    A side with no digits counts as 0. Returns None when the text is missing or
    has no ``-`` separator. Sides past the second are ignored.
    """
    if not salary:
        return None
    parts = salary.split("-")
    if len(parts) < 2:
        return None
    bounds = []
    for part in parts[:2]:
        digits = _NON_DIGITS.sub("", part.strip())
        bounds.append(int(digits) if digits else 0)
    return bounds[0], bounds[1]


def _contains_any(text: str, needles: Iterable[str]) -> bool:
    haystack = text.lower()
    return any(needle.lower() in haystack for needle in needles)


def _matches_salary(job: Job, ranges: Iterable[SalaryRange]) -> bool:
    parsed = parse_salary_range(job.salary_range)
    if parsed is None:
        return False
    low, high = parsed
    for salary_range in ranges:
        if low >= salary_range.min_salary and (
            salary_range.max_salary is None or high <= salary_range.max_salary
        ):
            return True
    return False


def matches_filters(job: Job, filters: JobFilters) -> bool:
    if filters.experience_levels and job.experience_level not in filters.experience_levels:
        return False
    if filters.job_types and job.job_type not in filters.job_types:
        return False
    if filters.work_environments and job.work_environment not in filters.work_environments:
        return False
    if filters.company_sizes and job.company_size not in filters.company_sizes:
        return False
    if filters.locations and not _contains_any(job.location, filters.locations):
        return False
    if filters.salary_ranges and not _matches_salary(job, filters.salary_ranges):
        return False
    if filters.industries and not _contains_any(job.industry, filters.industries):
        return False
    if filters.skills and not any(_contains_any(skill, filters.skills) for skill in job.skills):
        return False
    return True


def apply_filters(jobs: Iterable[Job], filters: JobFilters) -> List[Job]:
    if filters.is_empty():
        return list(jobs)
    return [job for job in jobs if matches_filters(job, filters)]


def primary_experience_level(filters: JobFilters) -> Optional[ExperienceLevel]:
    """The experience level forwarded to the backend, lowest seniority first."""
    for level in ExperienceLevel:
        if level in filters.experience_levels:
            return level
    return None
