from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    return parse_iso_date(str(value))


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Timestamps carrying an offset (or a trailing ``Z``) are converted to local
    time, since the store keeps naive DATETIME columns.
    """
    raw = (value or "").strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def week_range(today: date) -> tuple[date, date]:
    """Monday..Sunday of the ISO week containing ``today``."""
    monday = today - timedelta(days=today.isoweekday() - 1)
    if (date.max - monday).days < 6:
        return monday, date.max
    return monday, monday + timedelta(days=6)


def next_day(day: date) -> date:
    if day >= date.max:
        raise ValidationError(f"Date out of range: {day.isoformat()}")
    return day + timedelta(days=1)


def day_start(day: date) -> datetime:
    return datetime.combine(day, datetime.min.time())


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        if day == end:
            return
        day += timedelta(days=1)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, halves rounded up."""
    seconds = (end - start).total_seconds()
    return int(math.floor(seconds / 60 + 0.5))
