"""Dynamic priority of a candidate next action."""

from dataclasses import dataclass
from datetime import datetime
from typing import Final

from gtdcore.model import Idea
from gtdcore.utils import days_between

__all__ = [
    "AGE_BONUS_CAP",
    "AGE_BONUS_PER_DAY",
    "DUE_SOON_DAYS",
    "DUE_SOON_POINTS",
    "DUE_TODAY_POINTS",
    "IMPORTANT_POINTS",
    "OVERDUE_POINTS",
    "URGENT_POINTS",
    "ScoredIdea",
    "priority_score",
]

OVERDUE_POINTS: Final = 100
DUE_TODAY_POINTS: Final = 50
DUE_SOON_POINTS: Final = 25
DUE_SOON_DAYS: Final = 3
URGENT_POINTS: Final = 30
IMPORTANT_POINTS: Final = 20
AGE_BONUS_PER_DAY: Final = 0.5
AGE_BONUS_CAP: Final = 10.0


@dataclass(frozen=True, slots=True)
class ScoredIdea:
    """An idea paired with its priority score."""

    idea: Idea
    score: float


def priority_score(idea: Idea, *, now: datetime) -> float:
    """Score one idea; higher means do it sooner.

    Scores are computed per idea with no normalization across the pool.

    Args:
        idea: The candidate.
        now: The reference time.

    Returns:
        The priority score.
    """
    score = 0.0

    if idea.due_date is not None:
        days_until_due = days_between(now, idea.due_date)
        if days_until_due < 0:
            score += OVERDUE_POINTS
        elif days_until_due == 0:
            score += DUE_TODAY_POINTS
        elif days_until_due <= DUE_SOON_DAYS:
            score += DUE_SOON_POINTS

    if idea.is_urgent:
        score += URGENT_POINTS
    if idea.is_important:
        score += IMPORTANT_POINTS

    # Older ideas get a small boost so nothing sits forever.
    days_old = max(0, days_between(idea.created_at, now))
    score += min(days_old * AGE_BONUS_PER_DAY, AGE_BONUS_CAP)

    return score
