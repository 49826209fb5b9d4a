# dayflow/services/activity_service.py
from datetime import date, timedelta
from typing import List, Mapping, Optional, Union
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from dayflow.core.schemas.activity import ActivityDelta
from dayflow.core.utils import utc_today
from dayflow.models.activity import DailyActivity
from dayflow.repositories.activity_repository import ActivityRepository
from dayflow.repositories.user_repository import UserRepository
from dayflow.services.scoring import (
    BASELINE_WINDOW_DAYS,
    compute_intensity,
    compute_score,
)
from dayflow.services.side_effects import best_effort

logger = logging.getLogger(__name__)


def score_record(record: DailyActivity) -> float:
    return compute_score(
        tasks_completed=record.tasks_completed or 0,
        focus_minutes=record.focus_minutes or 0,
        habits_completed=record.habits_completed or 0,
        notes_created=record.notes_created or 0,
        schedule_events_completed=record.schedule_events_completed or 0,
    )


class ActivityService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ActivityRepository(session)
        self.users = UserRepository(session)

    @best_effort(default=lambda: None, label="Activity logging")
    async def record_activity(
        self,
        user_id: int,
        delta: Union[ActivityDelta, Mapping[str, int]],
        day: Optional[date] = None,
    ) -> Optional[DailyActivity]:
        """
        Add delta to the user's record for day (UTC today by default) and
        refresh its score and intensity.

        Side channel of the action that triggered it: returns None instead of
        raising when anything goes wrong.
        """
        if not isinstance(delta, ActivityDelta):
            delta = ActivityDelta.model_validate(dict(delta))
        day = day or utc_today()

        record = await self.repository.increment(user_id, day, delta.increments())

        # Derived values come from the stored counters, never from the delta
        record.score = score_record(record)
        baseline = await self.repository.active_scores_between(
            user_id,
            start=day - timedelta(days=BASELINE_WINDOW_DAYS),
            end=day,
        )
        record.intensity = compute_intensity(record.score, baseline)
        await self.users.mark_active(user_id, day)

        await self.session.commit()
        logger.info(
            f"Activity for user {user_id} on {day}: score={record.score} "
            f"intensity={record.intensity} (baseline of {len(baseline)})"
        )
        return record

    async def get_day(self, user_id: int, day: Optional[date] = None) -> Optional[DailyActivity]:
        return await self.repository.get(user_id, day or utc_today())

    async def history(self, user_id: int, start: date) -> List[DailyActivity]:
        """Records from start onwards, oldest first"""
        return await self.repository.list_since(user_id, start)
