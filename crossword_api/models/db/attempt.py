"""
PuzzleAttempt database model.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import sqlalchemy as sa
from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crossword_api.database import Base

if TYPE_CHECKING:
    from crossword_api.models.db.puzzle import Puzzle
    from crossword_api.models.db.user import User


class PuzzleAttempt(Base):
    """
    One user's solve session for one puzzle.
    In progress until submitted; completed attempts are immutable.
    """

    __tablename__ = "puzzle_attempts"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # References
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    puzzle_id: Mapped[int] = mapped_column(
        ForeignKey("puzzles.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Progress
    current_state_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_completed: Mapped[bool] = mapped_column(default=False, nullable=False, index=True)
    completion_time: Mapped[int | None] = mapped_column(nullable=True)  # seconds

    # Scoring
    hints_used: Mapped[int] = mapped_column(default=0, nullable=False)
    points_earned: Mapped[int] = mapped_column(default=0, nullable=False, index=True)
    accuracy_percentage: Mapped[float | None] = mapped_column(
        sa.Numeric(5, 2, asdecimal=False), nullable=True
    )

    # Timing
    started_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Constraints
    __table_args__ = (
        UniqueConstraint("user_id", "puzzle_id", name="uq_user_puzzle"),
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="attempts")
    puzzle: Mapped["Puzzle"] = relationship("Puzzle", back_populates="attempts")

    @property
    def current_state(self) -> dict[str, Any]:
        """Parse progress payload from JSON."""
        if not self.current_state_json:
            return {}
        try:
            return json.loads(self.current_state_json)
        except (json.JSONDecodeError, TypeError):
            return {}

    @current_state.setter
    def current_state(self, value: dict[str, Any] | None) -> None:
        """Serialize progress payload to JSON."""
        self.current_state_json = json.dumps(value) if value else None
