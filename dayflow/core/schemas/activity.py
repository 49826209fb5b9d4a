# dayflow/core/schemas/activity.py
from datetime import date
from typing import List
from pydantic import Field, model_validator

from .base import CamelModel


class ActivityDelta(CamelModel):
    """Counter increments for one qualifying action"""
    tasks_completed: int = Field(0, ge=0)
    focus_minutes: int = Field(0, ge=0)
    pomodoros: int = Field(0, ge=0)
    habits_completed: int = Field(0, ge=0)
    notes_created: int = Field(0, ge=0)
    schedule_events_completed: int = Field(0, ge=0)

    @model_validator(mode="after")
    def require_increment(self):
        if not any(self.increments().values()):
            raise ValueError("Activity delta must increment at least one counter")
        return self

    def increments(self) -> dict[str, int]:
        """Only the fields that actually change"""
        return {k: v for k, v in self.model_dump(by_alias=False).items() if v}


class DailyActivityResponse(CamelModel):
    day: date
    tasks_completed: int = 0
    focus_minutes: int = 0
    pomodoros: int = 0
    habits_completed: int = 0
    notes_created: int = 0
    schedule_events_completed: int = 0
    score: float = 0.0
    intensity: int = 0


class ActivityRecords(CamelModel):
    max_streak: int = 0
    personal_best_single_day: float = 0.0


class ActivityPredictions(CamelModel):
    next_streak_milestone: int = 5
    days_to_next_milestone: int = 5


class ActivitySummary(CamelModel):
    growth: int = 0
    current_week_score: float = 0.0
    last_week_score: float = 0.0
    records: ActivityRecords
    predictions: ActivityPredictions


class ActivityHistoryResponse(CamelModel):
    logs: List[DailyActivityResponse]
    analytics: ActivitySummary
