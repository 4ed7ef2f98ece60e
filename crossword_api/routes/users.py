"""User profile routes."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from crossword_api.database import get_db
from crossword_api.dependencies.auth import get_current_user
from crossword_api.models import (
    MessageResponse,
    PreferencesUpdateRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    UserStatsResponse,
)
from crossword_api.models.db.user import User
from crossword_api.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> ProfileResponse:
    """Get current user's profile."""
    return ProfileResponse.model_validate(user_service.get_profile(db, current_user.id))


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> ProfileResponse:
    """Update current user's display name or avatar."""
    profile = user_service.update_profile(
        db, current_user.id, data.display_name, data.avatar_url
    )
    return ProfileResponse.model_validate(profile)


@router.put("/preferences", response_model=ProfileResponse)
def update_preferences(
    data: PreferencesUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> ProfileResponse:
    """Update current user's preferences."""
    profile = user_service.update_preferences(
        db,
        current_user.id,
        music_enabled=data.music_enabled,
        music_volume=data.music_volume,
        theme=data.theme,
        difficulty=data.difficulty,
    )
    return ProfileResponse.model_validate(profile)


@router.get("/stats", response_model=UserStatsResponse)
def get_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> UserStatsResponse:
    """Get current user's puzzle statistics."""
    return UserStatsResponse.model_validate(user_service.get_user_stats(db, current_user.id))


@router.delete("/account", response_model=MessageResponse)
def delete_account(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Delete current user's account, profile and attempts."""
    user_service.delete_user(db, current_user.id)
    return MessageResponse(message="Account deleted successfully")
