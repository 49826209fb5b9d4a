# dayflow/core/schemas/badges.py
from datetime import datetime
from typing import List, Optional

from .base import CamelModel


class EarnedBadgeSchema(CamelModel):
    id: str
    name: str
    description: str
    icon: str
    tier: str
    earned_at: datetime


class BadgeCatalogEntry(CamelModel):
    id: str
    name: str
    description: str
    icon: str
    tier: str
    earned: bool = False
    earned_at: Optional[datetime] = None


class BadgeCatalogResponse(CamelModel):
    catalogue: List[BadgeCatalogEntry]
    earned: List[EarnedBadgeSchema]
    total: int
    count: int


class BadgeCheckResponse(CamelModel):
    new_badges: List[EarnedBadgeSchema] = []
