from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def coerce_date(value: Any, field_name: str) -> date:
    """Accept a date, a datetime or an ISO string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return parse_iso_date(value.strip()[:10])
        except ValueError:
            raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    raise ValidationError(f"{field_name} is required")


def coerce_time(value: Any, field_name: str) -> Optional[time]:
    """Accept a time, a datetime or an HH:MM[:SS] string; blank means None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        v = value.strip()
        if not v:
            return None
        for fmt in ("%H:%M:%S", "%H:%M"):
            try:
                return datetime.strptime(v, fmt).time()
            except ValueError:
                continue
        raise ValidationError(f"{field_name} must be a HH:MM time")
    raise ValidationError(f"{field_name} must be a HH:MM time")


def minutes_between(start: time, end: time) -> int:
    """Whole minutes from start to end on the same day, floored."""
    anchor = date(2000, 1, 1)
    delta = datetime.combine(anchor, end) - datetime.combine(anchor, start)
    return int(delta.total_seconds() // 60)


def format_work_minutes(minutes: Optional[int]) -> str:
    if not minutes:
        return "0h 0m"
    return f"{minutes // 60}h {minutes % 60}m"
