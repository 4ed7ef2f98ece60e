"""Attempt scoring and daily streak computation."""
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from crossword_api.models.db.user import UserProfile
from crossword_api.utils.time_utils import utc_day

# Accuracy: start 100; each hint -5; clamp at 0
MAX_ACCURACY = 100.0
ACCURACY_PER_HINT = 5
# Points
HINT_PENALTY = 10
MAX_TIME_BONUS = 50
ACCURACY_BONUS_FACTOR = 0.5
# Used when a puzzle has no estimate. Estimates are compared against
# completion seconds as-is, although puzzles store them in minutes.
DEFAULT_ESTIMATED_TIME = 300


@dataclass(frozen=True)
class ScoreBreakdown:
    """Every component of a submission's score."""

    accuracy: float
    time_bonus: int
    hints_penalty: int
    accuracy_bonus: int
    total_points: int


@dataclass(frozen=True)
class ScoreResult:
    """What a successful submission reports back to the caller."""

    is_completed: bool
    points_earned: int
    accuracy_percentage: float
    time_bonus: int
    new_streak: int


def calculate_accuracy(hints_used: int) -> float:
    """Return accuracy percentage (0-100) after ``hints_used`` hints."""
    return max(0.0, MAX_ACCURACY - hints_used * ACCURACY_PER_HINT)


def calculate_time_bonus(completion_time: int, estimated_time: int | None) -> int:
    """Return bonus points (0-50) for finishing under the estimate."""
    estimated = estimated_time or DEFAULT_ESTIMATED_TIME
    if completion_time >= estimated:
        return 0
    # Integer floor of (estimated - completion) / estimated * 50
    return (estimated - completion_time) * MAX_TIME_BONUS // estimated


def calculate_score(
    base_points: int,
    estimated_time: int | None,
    completion_time: int,
    hints_used: int,
) -> ScoreBreakdown:
    """Compute the full score for a submission."""
    accuracy = calculate_accuracy(hints_used)
    time_bonus = calculate_time_bonus(completion_time, estimated_time)
    hints_penalty = hints_used * HINT_PENALTY
    accuracy_bonus = math.floor(accuracy * ACCURACY_BONUS_FACTOR)

    total = base_points + time_bonus - hints_penalty + accuracy_bonus
    return ScoreBreakdown(
        accuracy=accuracy,
        time_bonus=time_bonus,
        hints_penalty=hints_penalty,
        accuracy_bonus=accuracy_bonus,
        total_points=max(0, total),
    )


def next_streak(
    current: int,
    longest: int,
    last_day: date | None,
    today: date,
) -> tuple[int, int]:
    """Return ``(current, longest)`` after a completion on ``today``.

    - no previous completion: (1, 1)
    - previous completion yesterday: current + 1, longest raised if exceeded
    - previous completion today: unchanged
    - anything else (gap of 2+ days, or a date ahead of today): reset to 1
    """
    if last_day is None:
        return 1, 1

    if last_day == today - timedelta(days=1):
        current += 1
        return current, max(longest, current)

    if last_day == today:
        return current, longest

    return 1, longest


def update_streak(profile: UserProfile, now: datetime) -> int:
    """Apply a completion at ``now`` to the profile's streak fields."""
    last_day = utc_day(profile.last_puzzle_date) if profile.last_puzzle_date else None
    profile.current_streak, profile.longest_streak = next_streak(
        profile.current_streak or 0,
        profile.longest_streak or 0,
        last_day,
        utc_day(now),
    )
    return profile.current_streak
