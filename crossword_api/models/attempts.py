"""Attempt-related Pydantic models."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from crossword_api.models.puzzles import PuzzleSummary


class StartAttemptRequest(BaseModel):
    """Model for starting an attempt."""

    puzzle_id: int = Field(..., ge=1)


class UpdateProgressRequest(BaseModel):
    """Model for saving in-progress state."""

    current_state: dict[str, Any] = Field(default_factory=dict)


class SubmitAttemptRequest(BaseModel):
    """Model for submitting a finished attempt."""

    completion_time: int = Field(..., ge=0, description="Seconds taken to solve")
    hints_used: int = Field(0, ge=0)


class AttemptResponse(BaseModel):
    """Model for a stored attempt."""

    id: int
    user_id: int
    puzzle_id: int
    current_state: dict[str, Any]
    is_completed: bool
    completion_time: int | None = None
    hints_used: int
    points_earned: int
    accuracy_percentage: float | None = None
    started_at: datetime
    completed_at: datetime | None = None
    puzzle: PuzzleSummary | None = None

    class Config:
        from_attributes = True


class ScoreResponse(BaseModel):
    """Model for attempt submission result."""

    is_completed: bool
    points_earned: int
    accuracy_percentage: float
    time_bonus: int
    new_streak: int

    class Config:
        from_attributes = True
