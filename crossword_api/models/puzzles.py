"""Puzzle-related Pydantic models."""
from datetime import date
from typing import Any

from pydantic import BaseModel


class PuzzleSummary(BaseModel):
    """Puzzle metadata without the grid."""

    id: int
    title: str
    difficulty: str
    estimated_time: int
    base_points: int

    class Config:
        from_attributes = True


class PuzzleResponse(BaseModel):
    """Full puzzle including grid and clues."""

    id: int
    title: str
    description: str | None = None
    grid_data: dict[str, Any] | list[Any]
    clues_across: dict[str, Any] | list[Any]
    clues_down: dict[str, Any] | list[Any]
    difficulty: str
    decade: str | None = None
    region: str | None = None
    subgenre: str | None = None
    estimated_time: int
    base_points: int
    is_daily_challenge: bool
    daily_challenge_date: date | None = None
    puzzle_pack_id: int | None = None

    class Config:
        from_attributes = True


class PaginationMeta(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int


class PuzzleListResponse(BaseModel):
    """One page of puzzles."""

    data: list[PuzzleResponse]
    meta: PaginationMeta


class PuzzlePackResponse(BaseModel):
    """Pack metadata as listed in the catalog."""

    id: int
    name: str
    description: str | None = None
    category_type: str
    category_value: str | None = None
    price_usd: float
    is_subscription: bool
    puzzle_count: int
    cover_image_url: str | None = None

    class Config:
        from_attributes = True


class PuzzlePackDetailResponse(PuzzlePackResponse):
    """Pack with the puzzles it contains."""

    puzzles: list[PuzzleSummary] = []
