"""Service layer for users and their profiles."""
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from crossword_api.errors import NotFoundError, ValidationError
from crossword_api.models.db.puzzle import Difficulty
from crossword_api.models.db.user import User, UserProfile

logger = logging.getLogger(__name__)

THEMES = {"dark", "light"}


@dataclass
class UserStats:
    """Aggregated puzzle statistics for a user."""

    total_points: int
    puzzles_completed: int
    current_streak: int
    longest_streak: int


def get_user_by_id(db: DbSession, user_id: int) -> User | None:
    """Get user by ID."""
    return db.get(User, user_id)


def get_user_by_email(db: DbSession, email: str) -> User | None:
    """Get user by email."""
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def create_user(
    db: DbSession, email: str, username: str, is_guest: bool = False
) -> User:
    """Create a new user together with its default profile."""
    email = email.strip().lower()
    username = username.strip()
    if not email or not username:
        raise ValidationError("email and username are required")

    user = User(email=email, username=username, is_guest=is_guest)
    user.profile = UserProfile(
        music_enabled=True,
        music_volume=70,
        difficulty_preference=Difficulty.BEGINNER.value,
        theme="dark",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id} ({username})")
    return user


def get_profile(db: DbSession, user_id: int) -> UserProfile:
    """Get a user's profile."""
    profile = db.execute(
        select(UserProfile).where(UserProfile.user_id == user_id)
    ).scalar_one_or_none()
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def update_profile(
    db: DbSession,
    user_id: int,
    display_name: str | None = None,
    avatar_url: str | None = None,
) -> UserProfile:
    """Update display name and avatar URL; empty values leave fields untouched."""
    profile = get_profile(db, user_id)
    if display_name:
        profile.display_name = display_name
    if avatar_url:
        profile.avatar_url = avatar_url
    db.commit()
    db.refresh(profile)
    return profile


def update_preferences(
    db: DbSession,
    user_id: int,
    music_enabled: bool,
    music_volume: int,
    theme: str | None = None,
    difficulty: str | None = None,
) -> UserProfile:
    """Update music, theme and difficulty preferences."""
    profile = get_profile(db, user_id)

    if music_volume < 0 or music_volume > 100:
        raise ValidationError("music volume must be between 0 and 100")
    if theme and theme not in THEMES:
        raise ValidationError("theme must be 'dark' or 'light'")
    if difficulty and difficulty not in {d.value for d in Difficulty}:
        raise ValidationError("difficulty must be 'beginner', 'intermediate', or 'expert'")

    profile.music_enabled = music_enabled
    profile.music_volume = music_volume
    if theme:
        profile.theme = theme
    if difficulty:
        profile.difficulty_preference = difficulty

    db.commit()
    db.refresh(profile)
    return profile


def get_user_stats(db: DbSession, user_id: int) -> UserStats:
    """Get cumulative puzzle statistics for a user."""
    profile = get_profile(db, user_id)
    return UserStats(
        total_points=profile.total_points,
        puzzles_completed=profile.puzzles_completed,
        current_streak=profile.current_streak,
        longest_streak=profile.longest_streak,
    )


def delete_user(db: DbSession, user_id: int) -> bool:
    """Delete a user with its profile and attempts."""
    user = db.get(User, user_id)
    if not user:
        return False

    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id}")
    return True
