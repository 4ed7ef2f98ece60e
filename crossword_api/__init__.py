"""Crossword puzzle backend: attempts, scoring and streaks."""
