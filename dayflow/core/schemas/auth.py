# dayflow/core/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import Optional
from datetime import date, datetime

from .base import CamelModel


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, max_length=64, description="User password")
    timezone: str = Field("UTC", max_length=64)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator('email')
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    model_config = ConfigDict(from_attributes=True)

class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token expiration time in seconds")

class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token for getting new access token")

class UserStatsSchema(CamelModel):
    total_focus_minutes: int = 0
    total_pomodoros: int = 0
    tasks_completed: int = 0
    longest_streak: int = 0
    current_streak: int = 0
    last_active_date: Optional[date] = None

class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    role: str = "user"
    timezone: str = "UTC"
    created_at: Optional[datetime] = None
    stats: Optional[UserStatsSchema] = None
