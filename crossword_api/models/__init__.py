"""Pydantic models."""
from crossword_api.models.attempts import (
    AttemptResponse,
    ScoreResponse,
    StartAttemptRequest,
    SubmitAttemptRequest,
    UpdateProgressRequest,
)
from crossword_api.models.puzzles import (
    PaginationMeta,
    PuzzleListResponse,
    PuzzlePackDetailResponse,
    PuzzlePackResponse,
    PuzzleResponse,
    PuzzleSummary,
)
from crossword_api.models.users import (
    MessageResponse,
    PreferencesUpdateRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    UserStatsResponse,
)

__all__ = [
    "AttemptResponse",
    "ScoreResponse",
    "StartAttemptRequest",
    "SubmitAttemptRequest",
    "UpdateProgressRequest",
    "PaginationMeta",
    "PuzzleListResponse",
    "PuzzlePackDetailResponse",
    "PuzzlePackResponse",
    "PuzzleResponse",
    "PuzzleSummary",
    "MessageResponse",
    "PreferencesUpdateRequest",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "UserStatsResponse",
]
