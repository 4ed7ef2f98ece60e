"""Time utilities."""
from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    SQLite drops tzinfo on round trip, so naive values read back from the
    database are taken to be UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_day(value: datetime) -> date:
    """Calendar day of ``value`` in UTC, the server reference zone."""
    return as_utc(value).date()


def parse_iso_timestamp(value: object) -> datetime | None:
    """Parse ISO timestamp string to datetime."""
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def parse_iso_date(value: object) -> date | None:
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) to a date."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = parse_iso_timestamp(value)
    if parsed is None:
        return None
    return parsed.date()
