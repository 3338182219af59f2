"""Interview sizing and interviewer selection."""

import random
from typing import List, Optional

from ...models.interview import InterviewConfig
from ...models.job import ExperienceLevel, InterviewDifficulty

MIN_QUESTIONS = 5
MAX_QUESTIONS = 12
BASE_QUESTIONS = 5

INTERVIEWER_NAMES: List[str] = [
    "Sarah Johnson", "Michael Chen", "Emily Rodriguez", "David Kim",
    "Jessica Taylor", "Ryan Patel", "Amanda Foster", "Kevin Liu",
    "Sophia Martinez", "James Wilson", "Alex Thompson", "Maria Garcia",
    "Daniel Lee", "Rachel Brown", "Christopher Davis", "Lisa Wang",
]

# (minimum rating, tier, extra questions, technical ratio), checked top-down
_DIFFICULTY_TIERS = (
    (4.8, InterviewDifficulty.EXTREME, 5, 0.8),
    (4.5, InterviewDifficulty.VERY_HARD, 4, 0.7),
    (4.2, InterviewDifficulty.CHALLENGING, 3, 0.6),
    (3.8, InterviewDifficulty.MODERATE, 2, 0.5),
)
_EASY_TIER = (InterviewDifficulty.EASY, 1, 0.4)

_EXPERIENCE_MULTIPLIERS = {
    ExperienceLevel.PRINCIPAL: 1.3,
    ExperienceLevel.LEAD: 1.3,
    ExperienceLevel.SENIOR: 1.2,
    ExperienceLevel.MID: 1.0,
    ExperienceLevel.JUNIOR: 0.8,
}


def get_interview_config(company_rating: float, experience_level: ExperienceLevel) -> InterviewConfig:
    """Derive difficulty, question count and technical ratio for a job.

    Args:
        company_rating: Company reputation, 1.0 to 5.0
        experience_level: Seniority of the role

    Returns:
        InterviewConfig with ``question_count`` in [MIN_QUESTIONS, MAX_QUESTIONS]
    """
    difficulty, bonus, technical_ratio = _EASY_TIER
    for threshold, tier, tier_bonus, ratio in _DIFFICULTY_TIERS:
        if company_rating >= threshold:
            difficulty, bonus, technical_ratio = tier, tier_bonus, ratio
            break

    multiplier = _EXPERIENCE_MULTIPLIERS.get(experience_level, 1.0)
    count = int((BASE_QUESTIONS + bonus) * multiplier)

    return InterviewConfig(
        difficulty=difficulty,
        question_count=max(MIN_QUESTIONS, min(MAX_QUESTIONS, count)),
        technical_question_ratio=technical_ratio,
    )


def pick_interviewer(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(INTERVIEWER_NAMES)
