# dayflow/api/v1/routes/pomodoro.py
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.exceptions import ValidationError
from dayflow.core.utils import get_current_user, get_owned, utc_today
from dayflow.core.schemas.productivity import (
    PomodoroStart,
    PomodoroComplete,
    PomodoroSchema,
    PomodoroResponse,
)
from dayflow.models.productivity import Pomodoro, Task
from dayflow.models.user import User
from dayflow.repositories.user_repository import UserRepository
from dayflow.services.activity_service import ActivityService
from dayflow.services.badge_service import BadgeService

router = APIRouter(prefix="/pomodoro", tags=["pomodoro"])


@router.post("/", response_model=PomodoroResponse, status_code=status.HTTP_201_CREATED)
async def start_pomodoro(
    payload: PomodoroStart,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    if payload.task_id is not None:
        await get_owned(session, Task, payload.task_id, current_user.id, "Task")

    pomo = Pomodoro(
        user_id=current_user.id,
        type=payload.type,
        duration=payload.duration,
        task_id=payload.task_id,
        day=utc_today(),
    )
    session.add(pomo)
    await session.commit()
    return PomodoroResponse(pomodoro=PomodoroSchema.model_validate(pomo))


@router.patch("/{pomodoro_id}/complete", response_model=PomodoroResponse)
async def complete_pomodoro(
    pomodoro_id: int,
    payload: PomodoroComplete,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Finish a session; work sessions count toward focus stats, badges and activity"""
    user_id = current_user.id
    pomo = await get_owned(session, Pomodoro, pomodoro_id, user_id, "Pomodoro")
    if pomo.completed:
        raise ValidationError("Pomodoro already completed")

    pomo.completed = True
    pomo.completed_at = datetime.now(timezone.utc)
    pomo.actual_duration = payload.actual_duration if payload.actual_duration else pomo.duration * 60
    if payload.note:
        pomo.note = payload.note

    is_work = pomo.type == "work"
    focus_minutes = pomo.actual_duration // 60
    if is_work:
        await UserRepository(session).increment_stats(
            user_id,
            total_pomodoros=1,
            total_focus_minutes=focus_minutes,
        )

    await session.commit()
    result = PomodoroSchema.model_validate(pomo)

    new_badges = []
    if is_work:
        new_badges = await BadgeService(session).award_badges(user_id)
        await ActivityService(session).record_activity(
            user_id,
            {"pomodoros": 1, "focus_minutes": focus_minutes},
        )

    return PomodoroResponse(pomodoro=result, new_badges=new_badges)
