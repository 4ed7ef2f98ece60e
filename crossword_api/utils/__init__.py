"""Utility modules."""
from crossword_api.utils.time_utils import (
    as_utc,
    parse_iso_date,
    parse_iso_timestamp,
    utc_day,
    utc_now,
)

__all__ = [
    "as_utc",
    "parse_iso_date",
    "parse_iso_timestamp",
    "utc_day",
    "utc_now",
]
