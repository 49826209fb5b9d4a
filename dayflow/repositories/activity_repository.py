# dayflow/repositories/activity_repository.py
from datetime import date
from typing import Dict, List, Optional
from sqlalchemy import select, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.models.activity import DailyActivity, ACTIVITY_COUNTERS

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_insert(session: AsyncSession, model):
    """INSERT construct supporting ON CONFLICT for the session's dialect"""
    dialect = session.bind.dialect.name
    try:
        return _INSERTS[dialect](model)
    except KeyError:
        raise NotImplementedError(f"Upserts are not supported on {dialect}")


class ActivityRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def increment(self, user_id: int, day: date, increments: Dict[str, int]) -> DailyActivity:
        """
        Add increments to the (user, day) counters in one statement, creating
        the row if needed, and return the row as stored after the write.
        """
        unknown = set(increments) - set(ACTIVITY_COUNTERS)
        if unknown:
            raise ValueError(f"Unknown activity counters: {sorted(unknown)}")

        values = {name: 0 for name in ACTIVITY_COUNTERS}
        values.update(increments)

        stmt = dialect_insert(self.session, DailyActivity).values(
            user_id=user_id, day=day, score=0.0, intensity=0, **values
        )
        set_ = {
            name: getattr(DailyActivity, name) + getattr(stmt.excluded, name)
            for name in increments
        }
        set_["updated_at"] = func.now()
        stmt = stmt.on_conflict_do_update(index_elements=["user_id", "day"], set_=set_)
        await self.session.execute(stmt)

        row = await self.get(user_id, day)
        if row is None:
            raise RuntimeError(f"Activity row for user {user_id} on {day} vanished after upsert")
        return row

    async def get(self, user_id: int, day: date) -> Optional[DailyActivity]:
        stmt = (
            select(DailyActivity)
            .where(DailyActivity.user_id == user_id, DailyActivity.day == day)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def active_scores_between(self, user_id: int, start: date, end: date) -> List[float]:
        """Scores of days with score > 0 where start <= day < end"""
        stmt = select(DailyActivity.score).where(
            DailyActivity.user_id == user_id,
            DailyActivity.day >= start,
            DailyActivity.day < end,
            DailyActivity.score > 0,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_since(self, user_id: int, start: date) -> List[DailyActivity]:
        """Records from start onwards, oldest first"""
        stmt = (
            select(DailyActivity)
            .where(DailyActivity.user_id == user_id, DailyActivity.day >= start)
            .order_by(DailyActivity.day.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
