# dayflow/api/v1/routes/schedule.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.utils import get_current_user, get_owned, utc_today
from dayflow.core.schemas.productivity import ScheduleEventCreate, ScheduleEventSchema
from dayflow.models.productivity import ScheduleEvent
from dayflow.models.user import User
from dayflow.services.activity_service import ActivityService

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.post("/", response_model=ScheduleEventSchema, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: ScheduleEventCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    event = ScheduleEvent(user_id=current_user.id, **payload.model_dump())
    session.add(event)
    await session.commit()
    return ScheduleEventSchema.model_validate(event)


@router.patch("/{event_id}/complete", response_model=ScheduleEventSchema)
async def toggle_event_completion(
    event_id: int,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Flip the completed flag; completing today's event counts as activity"""
    user_id = current_user.id
    event = await get_owned(session, ScheduleEvent, event_id, user_id, "Event")

    was_completed = event.is_completed
    event.is_completed = not was_completed
    await session.commit()
    result = ScheduleEventSchema.model_validate(event)

    if not was_completed and event.day == utc_today():
        await ActivityService(session).record_activity(
            user_id, {"schedule_events_completed": 1}
        )
    return result
