# dayflow/api/v1/routes/tasks.py
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.utils import get_current_user, get_owned
from dayflow.core.schemas.productivity import (
    TaskCreate,
    TaskUpdate,
    TaskSchema,
    TaskResponse,
    BulkStatusRequest,
    BulkStatusResponse,
)
from dayflow.models.productivity import Task
from dayflow.models.user import User
from dayflow.repositories.user_repository import UserRepository
from dayflow.services.activity_service import ActivityService
from dayflow.services.badge_service import BadgeService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("/", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    task = Task(user_id=current_user.id, **payload.model_dump())
    session.add(task)
    await session.commit()
    return TaskResponse(task=TaskSchema.model_validate(task))


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Update a task; completing it feeds the badge and activity engines"""
    # A failed side channel rolls the session back and expires current_user
    user_id = current_user.id
    task = await get_owned(session, Task, task_id, user_id, "Task")

    updates = payload.model_dump(exclude_unset=True)
    completing = updates.get("status") == "completed" and task.status != "completed"

    for field, value in updates.items():
        setattr(task, field, value)
    if completing:
        task.completed_at = datetime.now(timezone.utc)
        await UserRepository(session).increment_stats(user_id, tasks_completed=1)
    elif "status" in updates and updates["status"] != "completed":
        task.completed_at = None

    await session.commit()
    result = TaskSchema.model_validate(task)

    new_badges = []
    if completing:
        new_badges = await BadgeService(session).award_badges(user_id)
        await ActivityService(session).record_activity(user_id, {"tasks_completed": 1})

    return TaskResponse(task=result, new_badges=new_badges)


@router.post("/bulk/status", response_model=BulkStatusResponse)
async def bulk_update_status(
    payload: BulkStatusRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Set one status on many tasks; ids of other users' tasks are ignored"""
    user_id = current_user.id
    stmt = select(Task).where(Task.id.in_(payload.ids), Task.user_id == user_id)
    tasks = (await session.execute(stmt)).scalars().all()

    now = datetime.now(timezone.utc)
    completed_now = 0
    for task in tasks:
        if payload.status == "completed":
            if task.status != "completed":
                task.completed_at = now
                completed_now += 1
        else:
            task.completed_at = None
        task.status = payload.status

    if completed_now:
        await UserRepository(session).increment_stats(user_id, tasks_completed=completed_now)
    await session.commit()

    new_badges = []
    if completed_now:
        new_badges = await BadgeService(session).award_badges(user_id)
        await ActivityService(session).record_activity(user_id, {"tasks_completed": completed_now})

    return BulkStatusResponse(updated=len(tasks), new_badges=new_badges)
