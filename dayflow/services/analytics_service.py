# dayflow/services/analytics_service.py
"""Read-side helpers behind the activity history and habit streak views."""
from datetime import date, timedelta
from typing import Iterable, List, Sequence, Tuple
import math

from dayflow.core.schemas.activity import (
    ActivityPredictions,
    ActivityRecords,
    ActivitySummary,
)
from dayflow.models.activity import DailyActivity

STREAK_MILESTONE_STEP = 5
WEEK_DAYS = 7


def _active_days(records: Iterable[DailyActivity]) -> List[date]:
    return sorted({r.day for r in records if (r.score or 0) > 0})


def _runs(days: Sequence[date]) -> Tuple[int, int]:
    """(longest run, run ending at the last day) over sorted unique days"""
    longest = current = 0
    previous = None
    for day in days:
        if previous is not None and (day - previous).days == 1:
            current += 1
        else:
            current = 1
        longest = max(longest, current)
        previous = day
    return longest, current


def longest_streak(records: Iterable[DailyActivity]) -> int:
    """Longest run of consecutive calendar days with score > 0"""
    return _runs(_active_days(records))[0]


def trailing_streak(records: Iterable[DailyActivity]) -> int:
    """Length of the run that ends at the most recent active day"""
    return _runs(_active_days(records))[1]


def longest_run(days: Iterable[date]) -> int:
    return _runs(sorted(set(days)))[0]


def current_streak_ending(days: Iterable[date], today: date) -> int:
    """Consecutive days counted back from today; 0 if today is missing"""
    completed = set(days)
    streak = 0
    check = today
    while check in completed:
        streak += 1
        check -= timedelta(days=1)
    return streak


def week_over_week_growth(this_week: float, last_week: float) -> int:
    """Percentage change, rounded half up"""
    if last_week > 0:
        return math.floor((this_week - last_week) / last_week * 100 + 0.5)
    return 100 if this_week > 0 else 0


def next_streak_milestone(streak: int) -> int:
    """Smallest multiple of 5 strictly greater than streak"""
    return (streak // STREAK_MILESTONE_STEP + 1) * STREAK_MILESTONE_STEP


def summarize_activity(records: Sequence[DailyActivity], today: date) -> ActivitySummary:
    this_week_start = today - timedelta(days=WEEK_DAYS - 1)
    last_week_start = this_week_start - timedelta(days=WEEK_DAYS)

    current_week_score = sum(
        r.score or 0 for r in records if this_week_start <= r.day <= today
    )
    last_week_score = sum(
        r.score or 0 for r in records if last_week_start <= r.day < this_week_start
    )

    active_scores = [r.score for r in records if (r.score or 0) > 0]
    max_streak, current = _runs(_active_days(records))
    milestone = next_streak_milestone(max_streak)

    return ActivitySummary(
        growth=week_over_week_growth(current_week_score, last_week_score),
        current_week_score=current_week_score,
        last_week_score=last_week_score,
        records=ActivityRecords(
            max_streak=max_streak,
            personal_best_single_day=max(active_scores, default=0.0),
        ),
        predictions=ActivityPredictions(
            next_streak_milestone=milestone,
            days_to_next_milestone=max(0, milestone - current),
        ),
    )
