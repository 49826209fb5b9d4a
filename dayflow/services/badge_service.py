# dayflow/services/badge_service.py
from datetime import datetime, timezone
from typing import List
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from dayflow.core.schemas.badges import (
    BadgeCatalogEntry,
    BadgeCatalogResponse,
    EarnedBadgeSchema,
)
from dayflow.repositories.badge_repository import BadgeRepository
from dayflow.repositories.user_repository import UserRepository
from dayflow.services.badge_catalog import (
    BADGE_DEFINITIONS,
    StatsSnapshot,
    evaluate_catalog,
)
from dayflow.services.side_effects import best_effort

logger = logging.getLogger(__name__)


class BadgeService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.badges = BadgeRepository(session)
        self.users = UserRepository(session)

    @best_effort(default=list, label="Badge award")
    async def award_badges(self, user_id: int) -> List[EarnedBadgeSchema]:
        """
        Grant every badge the user newly qualifies for and return them in
        catalog order. Calling it again without a state change returns [].
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            return []

        stats = StatsSnapshot.from_row(await self.users.get_stats(user_id))
        earned_ids = await self.badges.get_earned_ids(user_id)
        counts = await self.badges.get_counts(user_id)

        qualified = evaluate_catalog(stats, counts, earned_ids)
        if not qualified:
            return []

        earned_at = datetime.now(timezone.utc)
        inserted = await self.badges.add_many(user_id, qualified, earned_at)
        await self.session.commit()

        if len(inserted) < len(qualified):
            # Another request for the same user got there first
            logger.info(f"User {user_id}: {len(qualified) - len(inserted)} badge(s) already granted concurrently")

        new_badges = [
            EarnedBadgeSchema(
                id=d.id,
                name=d.name,
                description=d.description,
                icon=d.icon,
                tier=d.tier.value,
                earned_at=earned_at,
            )
            for d in qualified
            if d.id in inserted
        ]
        if new_badges:
            logger.info(f"User {user_id} earned badges: {[b.id for b in new_badges]}")
        return new_badges

    async def catalog_for_user(self, user_id: int) -> BadgeCatalogResponse:
        """Full catalog with the user's earned state merged in"""
        earned_rows = await self.badges.get_earned(user_id)
        earned = [
            EarnedBadgeSchema(
                id=row.badge_id,
                name=row.name,
                description=row.description or "",
                icon=row.icon or "",
                tier=row.tier,
                earned_at=row.earned_at,
            )
            for row in earned_rows
        ]
        earned_by_id = {b.id: b for b in earned}

        catalogue = [
            BadgeCatalogEntry(
                id=d.id,
                name=d.name,
                description=d.description,
                icon=d.icon,
                tier=d.tier.value,
                earned=d.id in earned_by_id,
                earned_at=earned_by_id[d.id].earned_at if d.id in earned_by_id else None,
            )
            for d in BADGE_DEFINITIONS
        ]

        return BadgeCatalogResponse(
            catalogue=catalogue,
            earned=earned,
            total=len(BADGE_DEFINITIONS),
            count=len(earned),
        )
