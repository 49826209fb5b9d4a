# dayflow/core/utils.py
from datetime import date, datetime, timezone
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.exceptions import NotFoundError
from dayflow.repositories.user_repository import UserRepository
from dayflow.services.auth_service import AuthService
from dayflow.models.user import User
import logging

logger = logging.getLogger(__name__)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login")


def utc_today() -> date:
    """Calendar day used for activity bucketing (server UTC, not the user's timezone)"""
    return datetime.now(timezone.utc).date()


async def get_owned(session: AsyncSession, model, object_id: int, user_id: int, label: str):
    """Row by id scoped to its owner; other users' rows look missing"""
    stmt = select(model).where(model.id == object_id, model.user_id == user_id)
    obj = (await session.execute(stmt)).scalar_one_or_none()
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    session: AsyncSession = Depends(db_helper.session_getter)
) -> User:
    """Dependency resolving the current user from the bearer token"""
    try:
        user_repo = UserRepository(session)
        auth_service = AuthService(user_repo)
        return await auth_service.get_current_user(token)
    except Exception as e:
        logger.warning(f"Authentication failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
