from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine, update
from sqlalchemy.orm import sessionmaker

import crossword_api.models.db  # noqa: F401
from crossword_api.database import Base
from crossword_api.errors import AlreadyCompletedError, NotFoundError, ValidationError
from crossword_api.models.db.attempt import PuzzleAttempt
from crossword_api.services import attempt_service, puzzle_service, user_service
from crossword_api.services.scoring import calculate_score

NOON = datetime(2026, 5, 4, 12, 0, tzinfo=timezone.utc)


def test_start_creates_in_progress_attempt(db_session, make_user, make_puzzle) -> None:
    user = make_user()
    puzzle = make_puzzle()

    attempt = attempt_service.start_attempt(db_session, user.id, puzzle.id)

    assert attempt.id is not None
    assert attempt.is_completed is False
    assert attempt.hints_used == 0
    assert attempt.points_earned == 0
    assert attempt.current_state == {}
    assert attempt.completion_time is None
    assert attempt.accuracy_percentage is None


def test_start_returns_existing_in_progress_attempt(db_session, make_user, make_puzzle) -> None:
    user = make_user()
    puzzle = make_puzzle()

    first = attempt_service.start_attempt(db_session, user.id, puzzle.id)
    second = attempt_service.start_attempt(db_session, user.id, puzzle.id)

    assert first.id == second.id
    assert db_session.query(PuzzleAttempt).count() == 1


def test_start_after_completion_is_rejected(db_session, make_user, make_puzzle) -> None:
    user = make_user()
    puzzle = make_puzzle()
    attempt = attempt_service.start_attempt(db_session, user.id, puzzle.id)
    attempt_service.submit_attempt(db_session, attempt.id, 120, 0, now=NOON)

    with pytest.raises(AlreadyCompletedError):
        attempt_service.start_attempt(db_session, user.id, puzzle.id)


def test_start_unknown_puzzle(db_session, make_user) -> None:
    user = make_user()
    with pytest.raises(NotFoundError):
        attempt_service.start_attempt(db_session, user.id, 999)


def test_start_unknown_user(db_session, make_puzzle) -> None:
    puzzle = make_puzzle()
    with pytest.raises(NotFoundError):
        attempt_service.start_attempt(db_session, 999, puzzle.id)


def test_update_progress_replaces_state(db_session, make_user, make_puzzle) -> None:
    attempt = attempt_service.start_attempt(db_session, make_user().id, make_puzzle().id)

    attempt_service.update_progress(db_session, attempt.id, {"cells": {"0,0": "N"}})
    updated = attempt_service.update_progress(db_session, attempt.id, {"cells": {"0,1": "A"}})

    assert updated.current_state == {"cells": {"0,1": "A"}}


def test_update_progress_on_completed_attempt(db_session, make_user, make_puzzle) -> None:
    attempt = attempt_service.start_attempt(db_session, make_user().id, make_puzzle().id)
    attempt_service.update_progress(db_session, attempt.id, {"cells": {"0,0": "N"}})
    attempt_service.submit_attempt(db_session, attempt.id, 100, 0, now=NOON)

    with pytest.raises(AlreadyCompletedError):
        attempt_service.update_progress(db_session, attempt.id, {"cells": {}})

    assert attempt_service.get_attempt(db_session, attempt.id).current_state == {
        "cells": {"0,0": "N"}
    }


def test_update_progress_unknown_attempt(db_session) -> None:
    with pytest.raises(NotFoundError):
        attempt_service.update_progress(db_session, 42, {})


def test_submit_scores_and_updates_profile(db_session, make_user, make_puzzle) -> None:
    user = make_user()
    puzzle = make_puzzle(base_points=100, estimated_time=300)
    attempt = attempt_service.start_attempt(db_session, user.id, puzzle.id)

    result = attempt_service.submit_attempt(db_session, attempt.id, 150, 2, now=NOON)

    assert result.is_completed is True
    assert result.points_earned == 150
    assert result.accuracy_percentage == 90
    assert result.time_bonus == 25
    assert result.new_streak == 1

    stored = attempt_service.get_attempt(db_session, attempt.id)
    assert stored.is_completed is True
    assert stored.completion_time == 150
    assert stored.hints_used == 2
    assert stored.points_earned == 150
    assert stored.accuracy_percentage == pytest.approx(90.0)
    assert stored.completed_at is not None

    profile = user_service.get_profile(db_session, user.id)
    assert profile.total_points == 150
    assert profile.puzzles_completed == 1
    assert (profile.current_streak, profile.longest_streak) == (1, 1)
    assert profile.last_puzzle_date is not None


def test_submit_twice_fails_and_leaves_profile(db_session, make_user, make_puzzle) -> None:
    user = make_user()
    attempt = attempt_service.start_attempt(db_session, user.id, make_puzzle().id)
    attempt_service.submit_attempt(db_session, attempt.id, 150, 2, now=NOON)

    with pytest.raises(AlreadyCompletedError):
        attempt_service.submit_attempt(db_session, attempt.id, 10, 0, now=NOON)

    profile = user_service.get_profile(db_session, user.id)
    assert profile.total_points == 150
    assert profile.puzzles_completed == 1
    assert attempt_service.get_attempt(db_session, attempt.id).points_earned == 150


def test_concurrent_completion_is_not_scored_twice(db_session, make_user, make_puzzle) -> None:
    user = make_user()
    attempt = attempt_service.start_attempt(db_session, user.id, make_puzzle().id)
    db_session.get(PuzzleAttempt, attempt.id)

    # Another writer completes the row; the cached object still says in progress
    db_session.execute(
        update(PuzzleAttempt)
        .where(PuzzleAttempt.id == attempt.id)
        .values(is_completed=True)
        .execution_options(synchronize_session=False)
    )

    with pytest.raises(AlreadyCompletedError):
        attempt_service.submit_attempt(db_session, attempt.id, 150, 0, now=NOON)

    profile = user_service.get_profile(db_session, user.id)
    assert profile.total_points == 0
    assert profile.puzzles_completed == 0
    assert profile.last_puzzle_date is None


def test_submissions_from_two_sessions_both_reach_profile(tmp_path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'crossword.db'}")
    Base.metadata.create_all(bind=engine)
    Sessions = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with Sessions() as setup:
        user = user_service.create_user(setup, "racer@example.com", "racer")
        attempt_ids = []
        for title in ("Boom Bap", "Bounce"):
            puzzle = puzzle_service.create_puzzle(
                setup,
                {
                    "title": title,
                    "grid_data": {"rows": 5, "cols": 5, "cells": []},
                    "clues_across": {},
                    "clues_down": {},
                    "estimated_time": 300,
                    "base_points": 100,
                },
            )
            attempt_ids.append(attempt_service.start_attempt(setup, user.id, puzzle.id).id)
        user_id = user.id

    session_a = Sessions()
    session_b = Sessions()
    try:
        # Session B has the profile cached before A's submission commits
        user_service.get_profile(session_b, user_id)
        attempt_service.submit_attempt(session_a, attempt_ids[0], 150, 0, now=NOON)
        attempt_service.submit_attempt(session_b, attempt_ids[1], 150, 0, now=NOON)
    finally:
        session_a.close()
        session_b.close()

    with Sessions() as check:
        profile = user_service.get_profile(check, user_id)
        assert profile.puzzles_completed == 2
        assert profile.total_points == 2 * calculate_score(100, 300, 150, 0).total_points
        assert profile.current_streak == 1

    engine.dispose()


def test_failure_during_submit_rolls_back(db_session, make_user, make_puzzle, monkeypatch) -> None:
    user = make_user()
    attempt = attempt_service.start_attempt(db_session, user.id, make_puzzle().id)

    def boom(profile, now):
        raise RuntimeError("streak store unavailable")

    monkeypatch.setattr(attempt_service, "update_streak", boom)

    with pytest.raises(RuntimeError):
        attempt_service.submit_attempt(db_session, attempt.id, 150, 0, now=NOON)

    assert attempt_service.get_attempt(db_session, attempt.id).is_completed is False
    assert user_service.get_profile(db_session, user.id).total_points == 0


@pytest.mark.parametrize("completion, hints", [(-1, 0), (10, -1)])
def test_submit_rejects_negative_input(db_session, make_user, make_puzzle, completion, hints) -> None:
    attempt = attempt_service.start_attempt(db_session, make_user().id, make_puzzle().id)

    with pytest.raises(ValidationError):
        attempt_service.submit_attempt(db_session, attempt.id, completion, hints)

    assert attempt_service.get_attempt(db_session, attempt.id).is_completed is False


def test_submit_unknown_attempt(db_session) -> None:
    with pytest.raises(NotFoundError):
        attempt_service.submit_attempt(db_session, 7, 100, 0)


def test_streak_across_days(db_session, make_user, make_puzzle) -> None:
    user = make_user()
    puzzles = [make_puzzle(title=f"Puzzle {i}") for i in range(5)]
    days = [
        NOON,                           # first ever -> 1
        NOON + timedelta(hours=3),      # same day -> 1
        NOON + timedelta(days=1),       # consecutive -> 2
        NOON + timedelta(days=2),       # consecutive -> 3
        NOON + timedelta(days=5),       # gap -> 1
    ]
    streaks = []
    for puzzle, when in zip(puzzles, days):
        attempt = attempt_service.start_attempt(db_session, user.id, puzzle.id)
        streaks.append(
            attempt_service.submit_attempt(db_session, attempt.id, 400, 0, now=when).new_streak
        )

    assert streaks == [1, 1, 2, 3, 1]
    profile = user_service.get_profile(db_session, user.id)
    assert profile.current_streak == 1
    assert profile.longest_streak == 3
    assert profile.puzzles_completed == 5


def test_get_attempt_hides_other_users_attempts(db_session, make_user, make_puzzle) -> None:
    owner = make_user()
    other = make_user()
    attempt = attempt_service.start_attempt(db_session, owner.id, make_puzzle().id)

    assert attempt_service.get_attempt(db_session, attempt.id, user_id=owner.id).id == attempt.id
    with pytest.raises(NotFoundError):
        attempt_service.get_attempt(db_session, attempt.id, user_id=other.id)


def test_get_attempts_by_user(db_session, make_user, make_puzzle) -> None:
    user = make_user()
    first = attempt_service.start_attempt(db_session, user.id, make_puzzle(title="A").id)
    second = attempt_service.start_attempt(db_session, user.id, make_puzzle(title="B").id)
    attempt_service.start_attempt(db_session, make_user().id, make_puzzle(title="C").id)

    attempts = attempt_service.get_attempts_by_user(db_session, user.id)

    assert {a.id for a in attempts} == {first.id, second.id}
    assert all(a.puzzle is not None for a in attempts)
