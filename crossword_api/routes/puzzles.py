"""Puzzle endpoints."""
from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from crossword_api.config import DEFAULT_PAGE_SIZE
from crossword_api.database import get_db
from crossword_api.dependencies.auth import get_current_user
from crossword_api.models import PaginationMeta, PuzzleListResponse, PuzzleResponse
from crossword_api.models.db.user import User
from crossword_api.services import puzzle_service
from crossword_api.services.puzzle_service import PuzzleFilters

router = APIRouter(prefix="/api/puzzles", tags=["puzzles"])


@router.get("", response_model=PuzzleListResponse)
def list_puzzles(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
    difficulty: str | None = None,
    decade: str | None = None,
    region: str | None = None,
    subgenre: str | None = None,
    pack_id: int | None = None,
    page: int = 1,
    per_page: int = DEFAULT_PAGE_SIZE,
) -> PuzzleListResponse:
    """List puzzles with optional filters."""
    filters = PuzzleFilters(
        difficulty=difficulty,
        decade=decade,
        region=region,
        subgenre=subgenre,
        pack_id=pack_id,
        page=page,
        per_page=per_page,
    )
    puzzles, pagination = puzzle_service.list_puzzles(db, filters)
    return PuzzleListResponse(
        data=[PuzzleResponse.model_validate(p) for p in puzzles],
        meta=PaginationMeta(**asdict(pagination)),
    )


# Registered before /{puzzle_id} so "daily" is not parsed as an id
@router.get("/daily", response_model=PuzzleResponse)
def get_daily_challenge(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> PuzzleResponse:
    """Get today's daily challenge."""
    return PuzzleResponse.model_validate(puzzle_service.get_daily_challenge(db))


@router.get("/{puzzle_id}", response_model=PuzzleResponse)
def get_puzzle(
    puzzle_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> PuzzleResponse:
    """Get a puzzle by ID."""
    return PuzzleResponse.model_validate(puzzle_service.get_puzzle(db, puzzle_id))
