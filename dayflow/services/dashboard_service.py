# dayflow/services/dashboard_service.py
from datetime import date, timedelta

from sqlalchemy import select, func, case, or_
from sqlalchemy.ext.asyncio import AsyncSession

from dayflow.core.schemas.activity import DailyActivityResponse
from dayflow.core.schemas.auth import UserStatsSchema
from dayflow.core.schemas.dashboard import (
    DashboardHabit,
    DashboardHabits,
    DashboardPomodoro,
    DashboardResponse,
    DashboardTasks,
    DashboardUser,
    TaskStatusSummary,
)
from dayflow.core.schemas.productivity import NoteSchema, ScheduleEventSchema, TaskSchema
from dayflow.models.productivity import Habit, HabitCompletion, Note, ScheduleEvent, Task
from dayflow.models.user import User
from dayflow.repositories.activity_repository import ActivityRepository

WEEK_DAYS = 7
TODAY_TASK_LIMIT = 5
RECENT_NOTE_LIMIT = 3
OPEN_STATUSES = ("pending", "in-progress")
CLOSED_STATUSES = ("completed", "cancelled")

_priority_rank = case(
    {"urgent": 0, "high": 1, "medium": 2, "low": 3},
    value=Task.priority,
    else_=4,
)


class DashboardService:
    """Read-only home screen summary assembled from the user's own rows"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.activity = ActivityRepository(session)

    async def summary(self, user: User, today: date) -> DashboardResponse:
        week = await self._week_activity(user.id, today)
        today_record = week[-1]
        habits = await self._habits(user.id, today)

        return DashboardResponse(
            user=DashboardUser(
                name=user.name,
                stats=UserStatsSchema.model_validate(user.stats) if user.stats else None,
            ),
            tasks=await self._tasks(user.id, today),
            schedule=await self._schedule(user.id, today),
            habits=habits,
            pomodoro=DashboardPomodoro(
                today_count=today_record.pomodoros,
                today_minutes=today_record.focus_minutes,
            ),
            notes=await self._recent_notes(user.id),
            week_activity=week,
        )

    async def _tasks(self, user_id: int, today: date) -> DashboardTasks:
        rows = await self.session.execute(
            select(Task.status, func.count(Task.id))
            .where(Task.user_id == user_id)
            .group_by(Task.status)
        )
        counts = {status: n for status, n in rows.all()}
        summary = TaskStatusSummary(
            pending=counts.get("pending", 0),
            in_progress=counts.get("in-progress", 0),
            completed=counts.get("completed", 0),
            cancelled=counts.get("cancelled", 0),
            total=sum(counts.values()),
        )

        due_today = await self.session.execute(
            select(Task)
            .where(
                Task.user_id == user_id,
                Task.status.in_(OPEN_STATUSES),
                or_(Task.due_date == today, Task.due_date.is_(None)),
            )
            .order_by(_priority_rank, Task.id)
            .limit(TODAY_TASK_LIMIT)
        )
        overdue = await self.session.scalar(
            select(func.count(Task.id)).where(
                Task.user_id == user_id,
                Task.status.notin_(CLOSED_STATUSES),
                Task.due_date < today,
            )
        )

        return DashboardTasks(
            summary=summary,
            today=[TaskSchema.model_validate(t) for t in due_today.scalars().all()],
            overdue=overdue or 0,
        )

    async def _schedule(self, user_id: int, today: date):
        result = await self.session.execute(
            select(ScheduleEvent)
            .where(ScheduleEvent.user_id == user_id, ScheduleEvent.day == today)
            .order_by(ScheduleEvent.start_time, ScheduleEvent.id)
        )
        return [ScheduleEventSchema.model_validate(e) for e in result.scalars().all()]

    async def _habits(self, user_id: int, today: date) -> DashboardHabits:
        habits = (await self.session.execute(
            select(Habit)
            .where(Habit.user_id == user_id, Habit.is_active.is_(True))
            .order_by(Habit.id)
        )).scalars().all()
        done_today = set((await self.session.execute(
            select(HabitCompletion.habit_id)
            .join(Habit, Habit.id == HabitCompletion.habit_id)
            .where(Habit.user_id == user_id, HabitCompletion.day == today)
        )).scalars().all())

        items = [
            DashboardHabit(
                id=h.id,
                name=h.name,
                icon=h.icon,
                current_streak=h.current_streak,
                completed_today=h.id in done_today,
            )
            for h in habits
        ]
        return DashboardHabits(
            items=items,
            total=len(items),
            completed_today=sum(1 for h in items if h.completed_today),
        )

    async def _recent_notes(self, user_id: int):
        result = await self.session.execute(
            select(Note)
            .where(Note.user_id == user_id, Note.is_archived.is_(False))
            .order_by(Note.created_at.desc(), Note.id.desc())
            .limit(RECENT_NOTE_LIMIT)
        )
        return [NoteSchema.model_validate(n) for n in result.scalars().all()]

    async def _week_activity(self, user_id: int, today: date):
        """Last seven days oldest first; days without a record are zero-filled"""
        start = today - timedelta(days=WEEK_DAYS - 1)
        records = {r.day: r for r in await self.activity.list_since(user_id, start)}
        week = []
        for offset in range(WEEK_DAYS):
            day = start + timedelta(days=offset)
            record = records.get(day)
            week.append(
                DailyActivityResponse.model_validate(record) if record else DailyActivityResponse(day=day)
            )
        return week
