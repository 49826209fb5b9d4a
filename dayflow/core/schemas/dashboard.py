# dayflow/core/schemas/dashboard.py
from typing import List, Optional

from .base import CamelModel
from .activity import DailyActivityResponse
from .auth import UserStatsSchema
from .productivity import NoteSchema, ScheduleEventSchema, TaskSchema


class TaskStatusSummary(CamelModel):
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0
    total: int = 0

class DashboardTasks(CamelModel):
    summary: TaskStatusSummary
    today: List[TaskSchema] = []
    overdue: int = 0

class DashboardHabit(CamelModel):
    id: int
    name: str
    icon: str
    current_streak: int = 0
    completed_today: bool = False

class DashboardHabits(CamelModel):
    items: List[DashboardHabit] = []
    total: int = 0
    completed_today: int = 0

class DashboardPomodoro(CamelModel):
    today_count: int = 0
    today_minutes: int = 0

class DashboardUser(CamelModel):
    name: str
    stats: Optional[UserStatsSchema] = None

class DashboardResponse(CamelModel):
    user: DashboardUser
    tasks: DashboardTasks
    schedule: List[ScheduleEventSchema] = []
    habits: DashboardHabits
    pomodoro: DashboardPomodoro
    notes: List[NoteSchema] = []
    week_activity: List[DailyActivityResponse] = []
