# dayflow/repositories/user_repository.py
from typing import Optional
from datetime import date, datetime, timezone
from sqlalchemy import select, update, func, case, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from dayflow.models.user import User, UserStats
from dayflow.core.schemas.auth import UserCreate

class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Fetch a user with their stats row loaded"""
        stmt = select(User).options(selectinload(User.stats)).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, user_create: UserCreate, password_hash: str) -> User:
        """Create a user together with a zeroed stats row"""
        db_user = User(
            name=user_create.name,
            email=user_create.email.lower(),
            password_hash=password_hash,
            role="user",
            timezone=user_create.timezone,
            created_at=datetime.now(timezone.utc),
            updated_at=datetime.now(timezone.utc)
        )

        self.session.add(db_user)
        await self.session.flush()

        self.session.add(UserStats(user_id=db_user.id))

        await self.session.commit()
        return await self.get_by_id(db_user.id)

    async def get_stats(self, user_id: int) -> Optional[UserStats]:
        stmt = select(UserStats).where(UserStats.user_id == user_id).execution_options(
            populate_existing=True
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_stats(self, user_id: int, **increments: int) -> None:
        """Atomic in-place increments, e.g. increment_stats(1, total_pomodoros=1)"""
        if not increments:
            return
        values = {
            name: getattr(UserStats, name) + amount
            for name, amount in increments.items()
        }
        stmt = update(UserStats).where(UserStats.user_id == user_id).values(**values)
        await self.session.execute(stmt)

    async def set_streaks(self, user_id: int, current_streak: int, longest_streak: int) -> None:
        stmt = (
            update(UserStats)
            .where(UserStats.user_id == user_id)
            .values(
                current_streak=current_streak,
                longest_streak=case(
                    (UserStats.longest_streak < longest_streak, longest_streak),
                    else_=UserStats.longest_streak,
                ),
            )
        )
        await self.session.execute(stmt)

    async def mark_active(self, user_id: int, day: date) -> None:
        """Move last_active_date forward to day; backfilled days never move it back"""
        stmt = (
            update(UserStats)
            .where(
                UserStats.user_id == user_id,
                or_(UserStats.last_active_date.is_(None), UserStats.last_active_date < day),
            )
            .values(last_active_date=day)
        )
        await self.session.execute(stmt)
