# dayflow/models/engagement.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base

class EarnedBadge(Base):
    """A badge granted to a user. Rows are append-only."""
    __tablename__ = "earned_badges"
    __table_args__ = (
        UniqueConstraint("user_id", "badge_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    badge_id = Column(String(64), nullable=False)
    name = Column(String, nullable=False)
    description = Column(String)
    icon = Column(String)
    tier = Column(String(16), default="bronze", nullable=False)  # bronze, silver, gold, platinum
    earned_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="badges")
