# dayflow/api/v1/routes/habits.py
from fastapi import APIRouter, Depends, status
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.utils import get_current_user, get_owned, utc_today
from dayflow.core.schemas.productivity import HabitCreate, HabitCompletionToggle, HabitSchema
from dayflow.models.productivity import Habit, HabitCompletion
from dayflow.models.user import User
from dayflow.repositories.user_repository import UserRepository
from dayflow.services.activity_service import ActivityService
from dayflow.services.analytics_service import current_streak_ending, longest_run

router = APIRouter(prefix="/habits", tags=["habits"])


def _habit_schema(habit: Habit, days) -> HabitSchema:
    return HabitSchema(
        id=habit.id,
        name=habit.name,
        description=habit.description,
        icon=habit.icon,
        current_streak=habit.current_streak,
        longest_streak=habit.longest_streak,
        completed_days=sorted(days),
    )


@router.post("/", response_model=HabitSchema, status_code=status.HTTP_201_CREATED)
async def create_habit(
    payload: HabitCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    habit = Habit(user_id=current_user.id, **payload.model_dump())
    session.add(habit)
    await session.commit()
    return _habit_schema(habit, [])


@router.post("/{habit_id}/complete", response_model=HabitSchema)
async def toggle_habit_completion(
    habit_id: int,
    payload: HabitCompletionToggle,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Toggle the completion for one day and recompute streaks"""
    user_id = current_user.id
    habit = await get_owned(session, Habit, habit_id, user_id, "Habit")
    today = utc_today()

    existing = (await session.execute(
        select(HabitCompletion.id).where(
            HabitCompletion.habit_id == habit.id,
            HabitCompletion.day == payload.day,
        )
    )).scalar_one_or_none()

    completing = existing is None
    if completing:
        session.add(HabitCompletion(
            habit_id=habit.id, day=payload.day, count=payload.count, note=payload.note
        ))
    else:
        await session.execute(delete(HabitCompletion).where(HabitCompletion.id == existing))
    await session.flush()

    days = (await session.execute(
        select(HabitCompletion.day).where(HabitCompletion.habit_id == habit.id)
    )).scalars().all()
    habit.current_streak = current_streak_ending(days, today)
    habit.longest_streak = max(habit.longest_streak or 0, longest_run(days))
    await session.flush()

    # User-level streaks follow the best habit
    best_current, best_longest = (await session.execute(
        select(func.max(Habit.current_streak), func.max(Habit.longest_streak)).where(
            Habit.user_id == user_id, Habit.is_active.is_(True)
        )
    )).one()
    await UserRepository(session).set_streaks(
        user_id, best_current or 0, best_longest or 0
    )

    await session.commit()
    result = _habit_schema(habit, days)

    if completing and payload.day == today:
        await ActivityService(session).record_activity(user_id, {"habits_completed": 1})
    return result
