"""Tests for interview sizing."""

import random

import pytest

from quickq.models.job import ExperienceLevel, InterviewDifficulty
from quickq.services.interview.difficulty import (
    INTERVIEWER_NAMES,
    MAX_QUESTIONS,
    MIN_QUESTIONS,
    get_interview_config,
    pick_interviewer,
)


def test_top_company_senior_role_is_extreme_with_twelve_questions():
    config = get_interview_config(4.9, ExperienceLevel.SENIOR)
    assert config.difficulty == InterviewDifficulty.EXTREME
    assert config.question_count == 12
    assert config.technical_question_ratio == 0.8


@pytest.mark.parametrize(
    "rating, level, difficulty, count",
    [
        (4.8, ExperienceLevel.MID, InterviewDifficulty.EXTREME, 10),
        (4.5, ExperienceLevel.MID, InterviewDifficulty.VERY_HARD, 9),
        (4.2, ExperienceLevel.SENIOR, InterviewDifficulty.CHALLENGING, 9),
        (3.8, ExperienceLevel.LEAD, InterviewDifficulty.MODERATE, 9),
        (3.5, ExperienceLevel.MID, InterviewDifficulty.EASY, 6),
        (3.5, ExperienceLevel.JUNIOR, InterviewDifficulty.EASY, 5),
        (5.0, ExperienceLevel.PRINCIPAL, InterviewDifficulty.EXTREME, 12),
        (4.6, ExperienceLevel.JUNIOR, InterviewDifficulty.VERY_HARD, 7),
    ],
)
def test_tiers_and_counts(rating, level, difficulty, count):
    config = get_interview_config(rating, level)
    assert config.difficulty == difficulty
    assert config.question_count == count


@pytest.mark.parametrize("rating", [1.0, 2.5, 3.79, 4.0, 4.49, 4.99, 5.0])
@pytest.mark.parametrize("level", list(ExperienceLevel))
def test_question_count_is_clamped(rating, level):
    count = get_interview_config(rating, level).question_count
    assert MIN_QUESTIONS <= count <= MAX_QUESTIONS


def test_pick_interviewer_uses_pool():
    assert len(INTERVIEWER_NAMES) == 16
    assert pick_interviewer(random.Random(7)) in INTERVIEWER_NAMES
