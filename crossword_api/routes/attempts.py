"""Attempt endpoints: start, progress, submit."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session as DbSession

from crossword_api.database import get_db
from crossword_api.dependencies.auth import get_current_user
from crossword_api.models import (
    AttemptResponse,
    MessageResponse,
    ScoreResponse,
    StartAttemptRequest,
    SubmitAttemptRequest,
    UpdateProgressRequest,
)
from crossword_api.models.db.user import User
from crossword_api.services import attempt_service

router = APIRouter(prefix="/api/attempts", tags=["attempts"])


@router.post("/start", response_model=AttemptResponse, status_code=status.HTTP_201_CREATED)
def start_attempt(
    payload: StartAttemptRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> AttemptResponse:
    """Start a puzzle, or resume the attempt already in progress."""
    attempt = attempt_service.start_attempt(db, current_user.id, payload.puzzle_id)
    return AttemptResponse.model_validate(
        attempt_service.get_attempt(db, attempt.id)
    )


@router.get("", response_model=list[AttemptResponse])
def list_attempts(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> list[AttemptResponse]:
    """List the current user's attempts."""
    attempts = attempt_service.get_attempts_by_user(db, current_user.id)
    return [AttemptResponse.model_validate(a) for a in attempts]


@router.get("/{attempt_id}", response_model=AttemptResponse)
def get_attempt(
    attempt_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> AttemptResponse:
    """Get one of the current user's attempts."""
    attempt = attempt_service.get_attempt(db, attempt_id, user_id=current_user.id)
    return AttemptResponse.model_validate(attempt)


@router.put("/{attempt_id}/progress", response_model=MessageResponse)
def update_progress(
    attempt_id: int,
    payload: UpdateProgressRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Save the in-progress grid state."""
    attempt_service.get_attempt(db, attempt_id, user_id=current_user.id)
    attempt_service.update_progress(db, attempt_id, payload.current_state)
    return MessageResponse(message="Progress updated successfully")


@router.post("/{attempt_id}/submit", response_model=ScoreResponse)
def submit_attempt(
    attempt_id: int,
    payload: SubmitAttemptRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> ScoreResponse:
    """Submit a finished attempt and get the score."""
    attempt_service.get_attempt(db, attempt_id, user_id=current_user.id)
    result = attempt_service.submit_attempt(
        db, attempt_id, payload.completion_time, payload.hints_used
    )
    return ScoreResponse.model_validate(result)
