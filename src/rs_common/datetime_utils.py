"""UTC datetime utilities."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


def elapsed_days(since: datetime, now: datetime) -> int:
    """Whole days between two instants, truncated toward zero (7d 23h -> 7)."""
    seconds = (now - since).total_seconds()
    days = int(abs(seconds) // 86400)
    return days if seconds >= 0 else -days
