# dayflow/services/badge_catalog.py
"""
Static badge catalog and its two-phase evaluation.

Standard badges look at lifetime stats and aggregate counts. Meta badges look
at which badges the user holds, so they run after every standard badge of the
same pass has been decided.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)


class BadgeTier(str, enum.Enum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class BadgeStage(str, enum.Enum):
    STANDARD = "standard"
    META = "meta"


@dataclass(frozen=True)
class StatsSnapshot:
    total_focus_minutes: int = 0
    total_pomodoros: int = 0
    tasks_completed: int = 0
    longest_streak: int = 0
    current_streak: int = 0

    @classmethod
    def from_row(cls, row) -> "StatsSnapshot":
        if row is None:
            return cls()
        return cls(
            total_focus_minutes=row.total_focus_minutes or 0,
            total_pomodoros=row.total_pomodoros or 0,
            tasks_completed=row.tasks_completed or 0,
            longest_streak=row.longest_streak or 0,
            current_streak=row.current_streak or 0,
        )


@dataclass(frozen=True)
class BadgeCounts:
    """Aggregate counts fetched once per award pass"""
    tasks_completed: int = 0
    habits_created: int = 0
    notes_created: int = 0
    events_created: int = 0


@dataclass(frozen=True)
class BadgeContext:
    stats: StatsSnapshot
    counts: BadgeCounts
    earned_ids: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class BadgeDefinition:
    id: str
    name: str
    description: str
    icon: str
    tier: BadgeTier
    check: Callable[[BadgeContext], bool] = field(repr=False)
    stage: BadgeStage = BadgeStage.STANDARD


def _holds_every_other_badge(ctx: BadgeContext) -> bool:
    others = {d.id for d in BADGE_DEFINITIONS if d.id != "total_mastery"}
    return others <= ctx.earned_ids


BADGE_DEFINITIONS: List[BadgeDefinition] = [
    # Bronze
    BadgeDefinition(
        "first_task", "First Step", "Complete your very first task", "🎯", BadgeTier.BRONZE,
        lambda ctx: ctx.counts.tasks_completed >= 1,
    ),
    BadgeDefinition(
        "first_pomo", "Tomato Timer", "Complete your first Pomodoro session", "🍅", BadgeTier.BRONZE,
        lambda ctx: ctx.stats.total_pomodoros >= 1,
    ),
    BadgeDefinition(
        "first_habit", "Habit Seed", "Create and complete your first habit", "🌱", BadgeTier.BRONZE,
        lambda ctx: ctx.counts.habits_created >= 1,
    ),
    BadgeDefinition(
        "first_note", "Scribe", "Write your first note", "📝", BadgeTier.BRONZE,
        lambda ctx: ctx.counts.notes_created >= 1,
    ),
    # Silver
    BadgeDefinition(
        "tasks_10", "Momentum", "Complete 10 tasks", "⚡", BadgeTier.SILVER,
        lambda ctx: ctx.counts.tasks_completed >= 10,
    ),
    BadgeDefinition(
        "streak_3", "Streak Seeker", "Maintain a 3-day habit streak", "🔥", BadgeTier.SILVER,
        lambda ctx: ctx.stats.current_streak >= 3,
    ),
    BadgeDefinition(
        "focus_60", "Flow State", "Log 1 hour of focused work", "⏱", BadgeTier.SILVER,
        lambda ctx: ctx.stats.total_focus_minutes >= 60,
    ),
    BadgeDefinition(
        "planner_5", "Day Architect", "Create 5 schedule events", "📅", BadgeTier.SILVER,
        lambda ctx: ctx.counts.events_created >= 5,
    ),
    # Gold
    BadgeDefinition(
        "tasks_100", "Centurion", "Complete 100 tasks", "💯", BadgeTier.GOLD,
        lambda ctx: ctx.counts.tasks_completed >= 100,
    ),
    BadgeDefinition(
        "pomo_10", "Sprint Legend", "Complete 10 Pomodoro sessions", "🏃", BadgeTier.GOLD,
        lambda ctx: ctx.stats.total_pomodoros >= 10,
    ),
    BadgeDefinition(
        "focus_600", "Focus Oracle", "Log 10 hours of focused work", "🔮", BadgeTier.GOLD,
        lambda ctx: ctx.stats.total_focus_minutes >= 600,
    ),
    BadgeDefinition(
        "streak_7", "Flame Keeper", "Maintain a 7-day habit streak", "🔥", BadgeTier.GOLD,
        lambda ctx: ctx.stats.longest_streak >= 7,
    ),
    # Platinum
    BadgeDefinition(
        "tasks_500", "Legend", "Complete 500 tasks, a true legend", "👑", BadgeTier.PLATINUM,
        lambda ctx: ctx.counts.tasks_completed >= 500,
    ),
    BadgeDefinition(
        "focus_3000", "Flow God", "Log 50 hours of focused work", "🧘", BadgeTier.PLATINUM,
        lambda ctx: ctx.stats.total_focus_minutes >= 3000,
    ),
    BadgeDefinition(
        "total_mastery", "Total Mastery", "Earn all other 14 badges", "🌟", BadgeTier.PLATINUM,
        _holds_every_other_badge,
        stage=BadgeStage.META,
    ),
]

BADGES_BY_ID = {d.id: d for d in BADGE_DEFINITIONS}


def get_badge(badge_id: str) -> Optional[BadgeDefinition]:
    return BADGES_BY_ID.get(badge_id)


def _run_stage(
    stage: BadgeStage,
    definitions: Iterable[BadgeDefinition],
    ctx: BadgeContext,
) -> List[BadgeDefinition]:
    qualified = []
    for definition in definitions:
        if definition.stage is not stage or definition.id in ctx.earned_ids:
            continue
        try:
            if definition.check(ctx):
                qualified.append(definition)
        except Exception:
            # A broken predicate only costs its own badge this pass
            logger.warning(f"Badge predicate {definition.id} raised, skipping", exc_info=True)
    return qualified


def evaluate_catalog(
    stats: StatsSnapshot,
    counts: BadgeCounts,
    earned_ids: Iterable[str],
    definitions: Optional[List[BadgeDefinition]] = None,
) -> List[BadgeDefinition]:
    """
    Return definitions newly qualifying for this user, in catalog order.

    Phase 1 decides standard badges against the pre-pass earned set. Phase 2
    decides meta badges against pre-pass earned ids plus phase 1 results.
    """
    definitions = BADGE_DEFINITIONS if definitions is None else definitions
    already: Set[str] = set(earned_ids)

    standard = _run_stage(
        BadgeStage.STANDARD,
        definitions,
        BadgeContext(stats, counts, frozenset(already)),
    )
    meta = _run_stage(
        BadgeStage.META,
        definitions,
        BadgeContext(stats, counts, frozenset(already | {d.id for d in standard})),
    )

    newly = {d.id for d in standard} | {d.id for d in meta}
    return [d for d in definitions if d.id in newly]
