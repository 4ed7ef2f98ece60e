"""Service layer for puzzles and puzzle packs: lookup, listing, daily challenge, import."""
import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session as DBSession, selectinload

from crossword_api.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from crossword_api.errors import NotFoundError, ValidationError
from crossword_api.models.db.puzzle import Difficulty, PackCategory, Puzzle, PuzzlePack
from crossword_api.utils.time_utils import parse_iso_date, utc_now

logger = logging.getLogger(__name__)


@dataclass
class PuzzleFilters:
    """Filter and paging parameters for puzzle listing."""

    difficulty: str | None = None
    decade: str | None = None
    region: str | None = None
    subgenre: str | None = None
    pack_id: int | None = None
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE


@dataclass
class Pagination:
    page: int
    per_page: int
    total: int
    total_pages: int


def get_puzzle(db: DBSession, puzzle_id: int) -> Puzzle:
    """Get puzzle by ID."""
    puzzle = db.get(Puzzle, puzzle_id)
    if puzzle is None:
        raise NotFoundError("Puzzle not found")
    return puzzle


def get_daily_challenge(db: DBSession, day: date | None = None) -> Puzzle:
    """Get the daily challenge for ``day`` (defaults to today, UTC)."""
    day = day or utc_now().date()
    puzzle = db.execute(
        select(Puzzle).where(
            Puzzle.is_daily_challenge == True,  # noqa: E712
            Puzzle.daily_challenge_date == day,
        )
    ).scalar_one_or_none()
    if puzzle is None:
        raise NotFoundError("No daily challenge found for this date")
    return puzzle


def _apply_filters(query, filters: PuzzleFilters):
    if filters.difficulty:
        query = query.where(Puzzle.difficulty == filters.difficulty)
    if filters.decade:
        query = query.where(Puzzle.decade == filters.decade)
    if filters.region:
        query = query.where(Puzzle.region == filters.region)
    if filters.subgenre:
        query = query.where(Puzzle.subgenre == filters.subgenre)
    if filters.pack_id is not None:
        query = query.where(Puzzle.puzzle_pack_id == filters.pack_id)
    return query


def list_puzzles(
    db: DBSession, filters: PuzzleFilters
) -> tuple[list[Puzzle], Pagination]:
    """
    List puzzles matching filters, one page at a time.

    Out-of-range paging falls back to defaults: page < 1 becomes 1, and
    per_page outside 1..MAX_PAGE_SIZE becomes DEFAULT_PAGE_SIZE.
    """
    page = filters.page if filters.page >= 1 else 1
    per_page = filters.per_page
    if per_page < 1 or per_page > MAX_PAGE_SIZE:
        per_page = DEFAULT_PAGE_SIZE

    query = _apply_filters(select(Puzzle), filters)
    query = query.order_by(Puzzle.id).limit(per_page).offset((page - 1) * per_page)
    puzzles = list(db.execute(query).scalars().all())

    total = db.execute(
        _apply_filters(select(func.count(Puzzle.id)), filters)
    ).scalar() or 0

    pagination = Pagination(
        page=page,
        per_page=per_page,
        total=total,
        total_pages=math.ceil(total / per_page),
    )
    return puzzles, pagination


def create_puzzle(db: DBSession, data: dict[str, Any], commit: bool = True) -> Puzzle:
    """
    Create a puzzle from a generator payload.

    Expected keys: ``title``, ``grid_data``, ``clues_across``, ``clues_down``;
    optional ``description``, ``difficulty``, ``decade``, ``region``,
    ``subgenre``, ``estimated_time`` (minutes), ``base_points``,
    ``daily_challenge_date`` (ISO date), ``puzzle_pack_id``.
    """
    title = str(data.get("title") or "").strip()
    if not title:
        raise ValidationError("Puzzle title is required")

    difficulty = data.get("difficulty") or Difficulty.BEGINNER.value
    if difficulty not in {d.value for d in Difficulty}:
        raise ValidationError(f"Invalid difficulty: {difficulty}")

    daily_date = None
    if data.get("daily_challenge_date"):
        daily_date = parse_iso_date(data["daily_challenge_date"])
        if daily_date is None:
            raise ValidationError("Invalid daily_challenge_date")

    try:
        estimated_time = int(data.get("estimated_time") or 0)
        base_points = int(data.get("base_points", 100))
    except (TypeError, ValueError):
        raise ValidationError("estimated_time and base_points must be integers")
    if estimated_time < 0 or base_points < 0:
        raise ValidationError("estimated_time and base_points must be non-negative")

    pack = None
    if data.get("puzzle_pack_id") is not None:
        pack = db.get(PuzzlePack, data["puzzle_pack_id"])
        if pack is None:
            raise ValidationError(f"Unknown puzzle pack: {data['puzzle_pack_id']}")

    puzzle = Puzzle(
        title=title,
        description=data.get("description"),
        difficulty=difficulty,
        decade=data.get("decade"),
        region=data.get("region"),
        subgenre=data.get("subgenre"),
        estimated_time=estimated_time,
        base_points=base_points,
        is_daily_challenge=daily_date is not None,
        daily_challenge_date=daily_date,
    )
    puzzle.grid_data = data.get("grid_data")
    puzzle.clues_across = data.get("clues_across")
    puzzle.clues_down = data.get("clues_down")
    if pack is not None:
        puzzle.pack = pack
        pack.puzzle_count = (pack.puzzle_count or 0) + 1

    db.add(puzzle)
    if commit:
        db.commit()
        db.refresh(puzzle)
    return puzzle


def import_puzzles(db: DBSession, payloads: list[dict[str, Any]]) -> list[Puzzle]:
    """Create many puzzles in one transaction; nothing is saved if any is invalid."""
    try:
        puzzles = [create_puzzle(db, data, commit=False) for data in payloads]
        db.commit()
    except Exception:
        db.rollback()
        raise

    for puzzle in puzzles:
        db.refresh(puzzle)
    logger.info(f"Imported {len(puzzles)} puzzles")
    return puzzles


def get_available_packs(db: DBSession) -> list[PuzzlePack]:
    """Get all packs currently offered, oldest first."""
    query = (
        select(PuzzlePack)
        .where(PuzzlePack.is_active == True)  # noqa: E712
        .order_by(PuzzlePack.id)
    )
    return list(db.execute(query).scalars().all())


def get_puzzle_pack(db: DBSession, pack_id: int) -> PuzzlePack:
    """Get an active pack with its puzzles loaded.

    Withdrawn (inactive) packs are reported as missing.
    """
    pack = db.execute(
        select(PuzzlePack)
        .options(selectinload(PuzzlePack.puzzles))
        .where(PuzzlePack.id == pack_id, PuzzlePack.is_active == True)  # noqa: E712
    ).scalar_one_or_none()
    if pack is None:
        raise NotFoundError("Puzzle pack not found")
    return pack


def create_pack(db: DBSession, data: dict[str, Any], commit: bool = True) -> PuzzlePack:
    """
    Create an empty puzzle pack.

    Expected keys: ``name``; optional ``description``, ``category_type``
    (decade, region, subgenre or mixed), ``category_value``, ``price_usd``,
    ``is_subscription``, ``cover_image_url``, ``is_active``.
    """
    name = str(data.get("name") or "").strip()
    if not name:
        raise ValidationError("Pack name is required")

    category_type = data.get("category_type") or PackCategory.MIXED.value
    if category_type not in {c.value for c in PackCategory}:
        raise ValidationError(f"Invalid category_type: {category_type}")

    try:
        price = float(data.get("price_usd") or 0)
    except (TypeError, ValueError):
        raise ValidationError("price_usd must be a number")
    if price < 0:
        raise ValidationError("price_usd must be non-negative")

    pack = PuzzlePack(
        name=name,
        description=data.get("description"),
        category_type=category_type,
        category_value=data.get("category_value"),
        price_usd=round(price, 2),
        is_subscription=bool(data.get("is_subscription", False)),
        puzzle_count=0,
        cover_image_url=data.get("cover_image_url"),
        is_active=bool(data.get("is_active", True)),
    )
    db.add(pack)
    if commit:
        db.commit()
        db.refresh(pack)
    return pack


def import_pack(db: DBSession, data: dict[str, Any]) -> PuzzlePack:
    """Create a pack and its nested ``puzzles`` in one transaction."""
    items = data.get("puzzles") or []
    if not isinstance(items, list):
        raise ValidationError("Pack puzzles must be a list")

    try:
        pack = create_pack(db, data, commit=False)
        db.flush()
        for item in items:
            create_puzzle(db, {**item, "puzzle_pack_id": pack.id}, commit=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(pack)
    logger.info(f"Imported pack {pack.id} ({pack.name}) with {pack.puzzle_count} puzzles")
    return pack
