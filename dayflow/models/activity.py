# dayflow/models/activity.py
from sqlalchemy import Column, Integer, Float, Date, DateTime, ForeignKey, UniqueConstraint, func
from .base import Base

# Counter columns a delta may increment
ACTIVITY_COUNTERS = (
    "tasks_completed",
    "focus_minutes",
    "pomodoros",
    "habits_completed",
    "notes_created",
    "schedule_events_completed",
)

class DailyActivity(Base):
    """One aggregate per user per UTC calendar day, never deleted"""
    __tablename__ = "daily_activity"
    __table_args__ = (
        UniqueConstraint("user_id", "day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    day = Column(Date, nullable=False, index=True)

    tasks_completed = Column(Integer, default=0, nullable=False)
    focus_minutes = Column(Integer, default=0, nullable=False)
    pomodoros = Column(Integer, default=0, nullable=False)
    habits_completed = Column(Integer, default=0, nullable=False)
    notes_created = Column(Integer, default=0, nullable=False)
    schedule_events_completed = Column(Integer, default=0, nullable=False)

    # Derived, recomputed on every write
    score = Column(Float, default=0.0, nullable=False)
    intensity = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<DailyActivity(user_id={self.user_id}, day={self.day}, score={self.score})>"
