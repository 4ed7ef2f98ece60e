"""API route modules."""
from crossword_api.routes import attempts, puzzle_packs, puzzles, users

__all__ = ["attempts", "puzzle_packs", "puzzles", "users"]
