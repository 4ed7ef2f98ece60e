"""Database models."""
from crossword_api.models.db.user import User, UserProfile
from crossword_api.models.db.puzzle import Difficulty, PackCategory, Puzzle, PuzzlePack
from crossword_api.models.db.attempt import PuzzleAttempt

__all__ = [
    "User",
    "UserProfile",
    "Difficulty",
    "PackCategory",
    "Puzzle",
    "PuzzlePack",
    "PuzzleAttempt",
]
