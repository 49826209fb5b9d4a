# dayflow/core/schemas/productivity.py
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import Field, field_validator

from .base import CamelModel
from .badges import EarnedBadgeSchema

TaskStatus = Literal["pending", "in-progress", "completed", "cancelled"]
TaskPriority = Literal["low", "medium", "high", "urgent"]
PomodoroType = Literal["work", "short-break", "long-break"]


# --- Tasks ---

class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    priority: TaskPriority = "medium"
    due_date: Optional[date] = None

class TaskUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None

    @field_validator("title", "priority", "status", mode="before")
    @classmethod
    def reject_null(cls, v):
        # Omit the field to leave it unchanged; these columns cannot be cleared
        if v is None:
            raise ValueError("Field cannot be null")
        return v

class TaskSchema(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    priority: str
    status: str
    due_date: Optional[date] = None
    completed_at: Optional[datetime] = None

class TaskResponse(CamelModel):
    task: TaskSchema
    new_badges: List[EarnedBadgeSchema] = []

class BulkStatusRequest(CamelModel):
    ids: List[int] = Field(..., min_length=1)
    status: TaskStatus

class BulkStatusResponse(CamelModel):
    updated: int
    new_badges: List[EarnedBadgeSchema] = []


# --- Pomodoro ---

class PomodoroStart(CamelModel):
    type: PomodoroType
    duration: int = Field(..., ge=1, le=180, description="Planned length in minutes")
    task_id: Optional[int] = None

class PomodoroComplete(CamelModel):
    actual_duration: Optional[int] = Field(None, ge=0, description="Elapsed seconds")
    note: Optional[str] = Field(None, max_length=500)

class PomodoroSchema(CamelModel):
    id: int
    type: str
    duration: int
    actual_duration: Optional[int] = None
    completed: bool
    task_id: Optional[int] = None
    day: date

class PomodoroResponse(CamelModel):
    pomodoro: PomodoroSchema
    new_badges: List[EarnedBadgeSchema] = []


# --- Habits ---

class HabitCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    icon: str = "⭐"

class HabitCompletionToggle(CamelModel):
    day: date
    count: int = Field(1, ge=1)
    note: str = Field("", max_length=200)

class HabitSchema(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    icon: str
    current_streak: int = 0
    longest_streak: int = 0
    completed_days: List[date] = []


# --- Notes ---

class NoteCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = ""

class NoteSchema(CamelModel):
    id: int
    title: str
    content: str = ""
    created_at: Optional[datetime] = None


# --- Schedule ---

class ScheduleEventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    day: date
    start_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    end_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")

class ScheduleEventSchema(CamelModel):
    id: int
    title: str
    day: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_completed: bool = False
