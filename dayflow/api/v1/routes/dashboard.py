# dayflow/api/v1/routes/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.utils import get_current_user, utc_today
from dayflow.core.schemas.dashboard import DashboardResponse
from dayflow.models.user import User
from dayflow.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/", response_model=DashboardResponse)
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Home screen summary: tasks, schedule, habits, focus and the last 7 days"""
    return await DashboardService(session).summary(current_user, utc_today())
