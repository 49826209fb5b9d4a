# dayflow/api/v1/routes/activity.py
from datetime import timedelta
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.utils import get_current_user, utc_today
from dayflow.core.schemas.activity import ActivityHistoryResponse, DailyActivityResponse
from dayflow.models.user import User
from dayflow.services.activity_service import ActivityService
from dayflow.services.analytics_service import summarize_activity

router = APIRouter(prefix="/activity", tags=["activity"])

HISTORY_DAYS = 365


@router.get("/today", response_model=DailyActivityResponse)
async def get_today_activity(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Today's record, or an all-zero placeholder before the first action"""
    today = utc_today()
    record = await ActivityService(session).get_day(current_user.id, today)
    if record is None:
        return DailyActivityResponse(day=today)
    return record


@router.get("/12m", response_model=ActivityHistoryResponse)
async def get_activity_history(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Heatmap data for the last 12 months plus growth and streak analytics"""
    today = utc_today()
    logs = await ActivityService(session).history(
        current_user.id, today - timedelta(days=HISTORY_DAYS)
    )
    return ActivityHistoryResponse(
        logs=[DailyActivityResponse.model_validate(log) for log in logs],
        analytics=summarize_activity(logs, today),
    )
