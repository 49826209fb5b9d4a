# dayflow/models/user.py
from sqlalchemy import Column, Integer, String, DateTime, Date, func, ForeignKey
from sqlalchemy.orm import relationship
import enum
from .base import Base

class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, default=UserRole.USER.value)
    # Stored preference only; activity days are bucketed on the UTC boundary
    timezone = Column(String, default="UTC")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    stats = relationship("UserStats", back_populates="user", uselist=False)
    badges = relationship("EarnedBadge", back_populates="user", order_by="EarnedBadge.earned_at")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"

class UserStats(Base):
    """Lifetime counters read by the badge engine"""
    __tablename__ = "user_stats"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    total_focus_minutes = Column(Integer, default=0, nullable=False)
    total_pomodoros = Column(Integer, default=0, nullable=False)
    tasks_completed = Column(Integer, default=0, nullable=False)
    longest_streak = Column(Integer, default=0, nullable=False)
    current_streak = Column(Integer, default=0, nullable=False)
    last_active_date = Column(Date, nullable=True)

    user = relationship("User", back_populates="stats")
