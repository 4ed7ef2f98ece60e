"""Puzzle pack catalog endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from crossword_api.database import get_db
from crossword_api.dependencies.auth import get_current_user
from crossword_api.models import PuzzlePackDetailResponse, PuzzlePackResponse
from crossword_api.models.db.user import User
from crossword_api.services import puzzle_service

router = APIRouter(prefix="/api/puzzle-packs", tags=["puzzle-packs"])


@router.get("", response_model=list[PuzzlePackResponse])
def list_packs(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> list[PuzzlePackResponse]:
    """List packs currently on offer."""
    return [
        PuzzlePackResponse.model_validate(p)
        for p in puzzle_service.get_available_packs(db)
    ]


@router.get("/{pack_id}", response_model=PuzzlePackDetailResponse)
def get_pack(
    pack_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> PuzzlePackDetailResponse:
    return PuzzlePackDetailResponse.model_validate(
        puzzle_service.get_puzzle_pack(db, pack_id)
    )
