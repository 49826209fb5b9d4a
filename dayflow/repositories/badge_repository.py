# dayflow/repositories/badge_repository.py
from datetime import datetime
from typing import List, Set
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.models.engagement import EarnedBadge
from dayflow.models.productivity import Task, Habit, Note, ScheduleEvent
from dayflow.repositories.activity_repository import dialect_insert
from dayflow.services.badge_catalog import BadgeCounts, BadgeDefinition

class BadgeRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_earned(self, user_id: int) -> List[EarnedBadge]:
        stmt = (
            select(EarnedBadge)
            .where(EarnedBadge.user_id == user_id)
            .order_by(EarnedBadge.earned_at.asc(), EarnedBadge.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_earned_ids(self, user_id: int) -> Set[str]:
        stmt = select(EarnedBadge.badge_id).where(EarnedBadge.user_id == user_id)
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def get_counts(self, user_id: int) -> BadgeCounts:
        """The four aggregate counts as independent subqueries in one round trip"""
        def count_of(model, *conditions):
            return (
                select(func.count(model.id))
                .where(model.user_id == user_id, *conditions)
                .scalar_subquery()
            )

        stmt = select(
            count_of(Task, Task.status == "completed").label("tasks_completed"),
            count_of(Habit).label("habits_created"),
            count_of(Note).label("notes_created"),
            count_of(ScheduleEvent).label("events_created"),
        )
        row = (await self.session.execute(stmt)).one()
        return BadgeCounts(
            tasks_completed=row.tasks_completed or 0,
            habits_created=row.habits_created or 0,
            notes_created=row.notes_created or 0,
            events_created=row.events_created or 0,
        )

    async def add_many(
        self,
        user_id: int,
        definitions: List[BadgeDefinition],
        earned_at: datetime,
    ) -> Set[str]:
        """
        Append a batch of badges in a single statement. Badges the user already
        holds are left untouched; returns the ids actually inserted.
        """
        if not definitions:
            return set()

        stmt = (
            dialect_insert(self.session, EarnedBadge)
            .values([
                {
                    "user_id": user_id,
                    "badge_id": d.id,
                    "name": d.name,
                    "description": d.description,
                    "icon": d.icon,
                    "tier": d.tier.value,
                    "earned_at": earned_at,
                }
                for d in definitions
            ])
            .on_conflict_do_nothing(index_elements=["user_id", "badge_id"])
            .returning(EarnedBadge.badge_id)
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())
