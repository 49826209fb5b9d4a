# dayflow/models/__init__.py
from .base import Base
from .user import User, UserStats, UserRole
from .activity import DailyActivity, ACTIVITY_COUNTERS
from .engagement import EarnedBadge
from .productivity import Task, Pomodoro, Habit, HabitCompletion, Note, ScheduleEvent

# Re-exported so alembic and the admin see every mapped table
__all__ = [
    "Base",
    "User", "UserStats", "UserRole",
    "DailyActivity", "ACTIVITY_COUNTERS",
    "EarnedBadge",
    "Task", "Pomodoro", "Habit", "HabitCompletion", "Note", "ScheduleEvent",
]
