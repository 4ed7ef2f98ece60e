"""Service layer for puzzle attempts: start, progress, submission."""
import logging
from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DBSession, joinedload

from crossword_api.errors import AlreadyCompletedError, NotFoundError, ValidationError
from crossword_api.models.db.attempt import PuzzleAttempt
from crossword_api.models.db.puzzle import Puzzle
from crossword_api.models.db.user import User, UserProfile
from crossword_api.services.scoring import ScoreResult, calculate_score, update_streak
from crossword_api.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


def _find_by_user_and_puzzle(
    db: DBSession, user_id: int, puzzle_id: int
) -> PuzzleAttempt | None:
    return db.execute(
        select(PuzzleAttempt).where(
            PuzzleAttempt.user_id == user_id,
            PuzzleAttempt.puzzle_id == puzzle_id,
        )
    ).scalar_one_or_none()


def start_attempt(db: DBSession, user_id: int, puzzle_id: int) -> PuzzleAttempt:
    """
    Start an attempt for (user, puzzle), or resume the one in progress.

    Raises:
        NotFoundError: user or puzzle does not exist.
        AlreadyCompletedError: the user already completed this puzzle.
    """
    if db.get(Puzzle, puzzle_id) is None:
        raise NotFoundError("Puzzle not found")
    if db.get(User, user_id) is None:
        raise NotFoundError("User not found")

    existing = _find_by_user_and_puzzle(db, user_id, puzzle_id)
    if existing is not None:
        if existing.is_completed:
            raise AlreadyCompletedError("Puzzle already completed")
        return existing

    attempt = PuzzleAttempt(
        user_id=user_id,
        puzzle_id=puzzle_id,
        is_completed=False,
        hints_used=0,
        points_earned=0,
        started_at=utc_now(),
    )
    db.add(attempt)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent start for the same pair
        db.rollback()
        existing = _find_by_user_and_puzzle(db, user_id, puzzle_id)
        if existing is None:
            raise
        if existing.is_completed:
            raise AlreadyCompletedError("Puzzle already completed")
        return existing

    db.refresh(attempt)
    logger.info(f"User {user_id} started puzzle {puzzle_id} (attempt {attempt.id})")
    return attempt


def update_progress(
    db: DBSession,
    attempt_id: int,
    current_state: dict[str, Any] | None,
) -> PuzzleAttempt:
    """Replace the progress payload of an in-progress attempt."""
    attempt = db.get(PuzzleAttempt, attempt_id)
    if not attempt:
        raise NotFoundError("Attempt not found")
    if attempt.is_completed:
        raise AlreadyCompletedError("Cannot update completed attempt")

    attempt.current_state = current_state
    db.commit()
    db.refresh(attempt)
    return attempt


def submit_attempt(
    db: DBSession,
    attempt_id: int,
    completion_time: int,
    hints_used: int,
    now: datetime | None = None,
) -> ScoreResult:
    """
    Complete an attempt, score it and update the owner's profile.

    Completing the attempt and updating the profile happen in one
    transaction. The completion flag is flipped with a conditional update,
    so of two concurrent submissions only one can score. The profile row is
    locked and re-read after that update, so submissions of different
    attempts by the same user all reach the cumulative counters.

    Args:
        db: Database session
        attempt_id: Attempt being submitted
        completion_time: Seconds taken to solve
        hints_used: Number of hints revealed
        now: Submission time (defaults to current UTC time)
    """
    if completion_time is None or completion_time < 0:
        raise ValidationError("completion_time must be a non-negative number of seconds")
    if hints_used is None or hints_used < 0:
        raise ValidationError("hints_used must be non-negative")

    attempt = db.get(PuzzleAttempt, attempt_id)
    if not attempt:
        raise NotFoundError("Attempt not found")
    if attempt.is_completed:
        raise AlreadyCompletedError("Attempt already completed")

    puzzle = db.get(Puzzle, attempt.puzzle_id)
    if not puzzle:
        raise NotFoundError("Puzzle not found")

    now = now or utc_now()
    score = calculate_score(
        puzzle.base_points, puzzle.estimated_time, completion_time, hints_used
    )

    try:
        result = db.execute(
            update(PuzzleAttempt)
            .where(
                PuzzleAttempt.id == attempt_id,
                PuzzleAttempt.is_completed == False,  # noqa: E712
            )
            .values(
                is_completed=True,
                completed_at=now,
                completion_time=completion_time,
                hints_used=hints_used,
                points_earned=score.total_points,
                accuracy_percentage=score.accuracy,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise AlreadyCompletedError("Attempt already completed")

        # Re-read under the write lock; counters cached earlier may be stale
        profile = db.execute(
            select(UserProfile)
            .where(UserProfile.user_id == attempt.user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if not profile:
            raise NotFoundError("User profile not found")

        new_streak = update_streak(profile, now)
        profile.total_points += score.total_points
        profile.puzzles_completed += 1
        profile.last_puzzle_date = now

        db.commit()
    except AlreadyCompletedError:
        db.rollback()
        logger.warning(f"Rejected concurrent submission of attempt {attempt_id}")
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(attempt)
    logger.info(
        f"Attempt {attempt_id} completed by user {attempt.user_id}: "
        f"{score.total_points} points, streak {new_streak}"
    )
    return ScoreResult(
        is_completed=True,
        points_earned=score.total_points,
        accuracy_percentage=score.accuracy,
        time_bonus=score.time_bonus,
        new_streak=new_streak,
    )


def get_attempt(
    db: DBSession, attempt_id: int, user_id: int | None = None
) -> PuzzleAttempt:
    """Get attempt by ID with its puzzle loaded.

    When ``user_id`` is given, attempts owned by someone else are reported
    as missing.
    """
    attempt = db.execute(
        select(PuzzleAttempt)
        .options(joinedload(PuzzleAttempt.puzzle))
        .where(PuzzleAttempt.id == attempt_id)
    ).scalar_one_or_none()
    if attempt is None or (user_id is not None and attempt.user_id != user_id):
        raise NotFoundError("Attempt not found")
    return attempt


def get_attempts_by_user(db: DBSession, user_id: int) -> list[PuzzleAttempt]:
    """Get all attempts for a user, newest first."""
    query = (
        select(PuzzleAttempt)
        .options(joinedload(PuzzleAttempt.puzzle))
        .where(PuzzleAttempt.user_id == user_id)
        .order_by(PuzzleAttempt.started_at.desc(), PuzzleAttempt.id.desc())
    )
    return list(db.execute(query).scalars().all())

