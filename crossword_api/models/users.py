"""Pydantic models for users and profiles."""
from datetime import datetime

from pydantic import BaseModel, Field


class ProfileResponse(BaseModel):
    """User profile response."""

    user_id: int
    display_name: str | None
    avatar_url: str | None
    total_points: int
    puzzles_completed: int
    current_streak: int
    longest_streak: int
    last_puzzle_date: datetime | None
    music_enabled: bool
    music_volume: int
    difficulty_preference: str
    theme: str

    class Config:
        from_attributes = True


class ProfileUpdateRequest(BaseModel):
    """Profile update request."""

    display_name: str | None = Field(None, max_length=100)
    avatar_url: str | None = Field(None, max_length=500)


class PreferencesUpdateRequest(BaseModel):
    """Preferences update request."""

    music_enabled: bool = True
    music_volume: int = 70
    theme: str | None = None
    difficulty: str | None = None


class UserStatsResponse(BaseModel):
    """Cumulative puzzle statistics."""

    total_points: int
    puzzles_completed: int
    current_streak: int
    longest_streak: int

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
