# dayflow/api/v1/routes/badges.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.utils import get_current_user
from dayflow.core.schemas.badges import BadgeCatalogResponse, BadgeCheckResponse
from dayflow.models.user import User
from dayflow.services.badge_service import BadgeService

router = APIRouter(prefix="/badges", tags=["badges"])


@router.get("/", response_model=BadgeCatalogResponse)
async def get_badges(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Full badge catalog with the current user's earned state"""
    return await BadgeService(session).catalog_for_user(current_user.id)


@router.post("/check", response_model=BadgeCheckResponse)
async def check_badges(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    """Re-run the award pass, e.g. right after login"""
    new_badges = await BadgeService(session).award_badges(current_user.id)
    return BadgeCheckResponse(new_badges=new_badges)
