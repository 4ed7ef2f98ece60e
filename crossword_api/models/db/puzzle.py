"""
Puzzle database model.
"""

from __future__ import annotations

import enum
import json
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crossword_api.database import Base

if TYPE_CHECKING:
    from crossword_api.models.db.attempt import PuzzleAttempt


class Difficulty(str, enum.Enum):
    """Puzzle difficulty tier."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


def _load_json(raw: str | None, default: Any) -> Any:
    if not raw:
        return default
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return default


class Puzzle(Base):
    """
    Crossword puzzle record.
    Grid and clues are produced by the external layout generator and stored
    as JSON text.
    """

    __tablename__ = "puzzles"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Layout (stored as JSON strings)
    grid_data_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    clues_across_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    clues_down_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")

    # Categorization
    difficulty: Mapped[str] = mapped_column(
        String(20), default=Difficulty.BEGINNER.value, nullable=False, index=True
    )
    decade: Mapped[str | None] = mapped_column(String(10), nullable=True, index=True)
    region: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    subgenre: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Scoring metadata; estimated_time is in minutes
    estimated_time: Mapped[int] = mapped_column(default=0, nullable=False)
    base_points: Mapped[int] = mapped_column(default=100, nullable=False)

    # Daily challenge
    is_daily_challenge: Mapped[bool] = mapped_column(default=False, nullable=False, index=True)
    daily_challenge_date: Mapped[date | None] = mapped_column(
        sa.Date, unique=True, nullable=True
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

    # Pack association
    puzzle_pack_id: Mapped[int | None] = mapped_column(
        sa.ForeignKey("puzzle_packs.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Relationships
    attempts: Mapped[list["PuzzleAttempt"]] = relationship(
        "PuzzleAttempt", back_populates="puzzle", cascade="all, delete-orphan"
    )
    pack: Mapped["PuzzlePack | None"] = relationship(
        "PuzzlePack", back_populates="puzzles"
    )

    @property
    def grid_data(self) -> dict[str, Any]:
        """Parse grid from JSON."""
        return _load_json(self.grid_data_json, {})

    @grid_data.setter
    def grid_data(self, value: dict[str, Any] | None) -> None:
        self.grid_data_json = json.dumps(value or {})

    @property
    def clues_across(self) -> dict[str, Any]:
        """Parse across clues from JSON."""
        return _load_json(self.clues_across_json, {})

    @clues_across.setter
    def clues_across(self, value: dict[str, Any] | None) -> None:
        self.clues_across_json = json.dumps(value or {})

    @property
    def clues_down(self) -> dict[str, Any]:
        """Parse down clues from JSON."""
        return _load_json(self.clues_down_json, {})

    @clues_down.setter
    def clues_down(self, value: dict[str, Any] | None) -> None:
        self.clues_down_json = json.dumps(value or {})


class PackCategory(str, enum.Enum):
    """How a pack groups its puzzles."""

    DECADE = "decade"
    REGION = "region"
    SUBGENRE = "subgenre"
    MIXED = "mixed"


class PuzzlePack(Base):
    """A themed collection of puzzles sold together."""

    __tablename__ = "puzzle_packs"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Categorization, e.g. ("decade", "90s") or ("region", "NYC")
    category_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    category_value: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)

    # Pricing
    price_usd: Mapped[float] = mapped_column(
        sa.Numeric(10, 2, asdecimal=False), nullable=False, default=0
    )
    is_subscription: Mapped[bool] = mapped_column(default=False, nullable=False)

    puzzle_count: Mapped[int] = mapped_column(default=0, nullable=False)
    cover_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False, index=True)

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

    # Deleting a pack leaves its puzzles in place
    puzzles: Mapped[list["Puzzle"]] = relationship(
        "Puzzle", back_populates="pack", order_by="Puzzle.id"
    )
