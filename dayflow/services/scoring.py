# dayflow/services/scoring.py
"""
Daily productivity score and its 0-4 intensity level.

The score is a fixed weighted sum of the day's counters. Intensity is
absolute while a user has little history (cold start) and relative to the
user's own recent active days once enough of them exist (warm regime).
"""
from typing import Sequence

# Weights per counter
TASK_WEIGHT = 2
FOCUS_BLOCK_MINUTES = 25
HABIT_WEIGHT = 1.5
NOTE_WEIGHT = 1
SCHEDULE_EVENT_WEIGHT = 1.5

# Baseline: active days in the trailing window before the scored day
BASELINE_WINDOW_DAYS = 90
MIN_BASELINE_RECORDS = 5

# Cold start upper bounds for intensities 1, 2, 3; anything above is 4
COLD_START_THRESHOLDS = (3, 6, 10)
# Warm regime multipliers of the baseline average for intensities 1, 2, 3
WARM_MULTIPLIERS = (0.5, 1.0, 1.5)

MAX_INTENSITY = 4


def compute_score(
    tasks_completed: int = 0,
    focus_minutes: int = 0,
    habits_completed: int = 0,
    notes_created: int = 0,
    schedule_events_completed: int = 0,
) -> float:
    """Weighted score; every full focus block counts as one point"""
    return (
        TASK_WEIGHT * tasks_completed
        + focus_minutes // FOCUS_BLOCK_MINUTES
        + HABIT_WEIGHT * habits_completed
        + NOTE_WEIGHT * notes_created
        + SCHEDULE_EVENT_WEIGHT * schedule_events_completed
    )


def _bucket(score: float, bounds: Sequence[float]) -> int:
    if score == 0:
        return 0
    for level, bound in enumerate(bounds, start=1):
        if score < bound:
            return level
    return MAX_INTENSITY


def compute_intensity(score: float, baseline_scores: Sequence[float]) -> int:
    """
    Map a score to 0-4.

    baseline_scores must already be restricted to active (score > 0) days
    inside the baseline window, excluding the scored day itself.
    """
    if len(baseline_scores) < MIN_BASELINE_RECORDS:
        return _bucket(score, COLD_START_THRESHOLDS)

    avg = sum(baseline_scores) / len(baseline_scores)
    return _bucket(score, [avg * m for m in WARM_MULTIPLIERS])
