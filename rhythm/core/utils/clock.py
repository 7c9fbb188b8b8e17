"""Calendar helpers and the request-scoped "as of" date.

Domain services never read the wall clock themselves: controllers resolve
``today()`` once per request and pass the date down explicitly.  All calendar
days are UTC days; client-supplied ISO strings are normalised to the UTC date
they fall on.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Optional, Union

from flask import current_app, has_app_context

DayLike = Union[date, datetime, str]


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    override = current_app.config.get("AS_OF_DATE") if has_app_context() else None
    if override:
        return parse_day(override)
    return utcnow().date()


def now() -> datetime:
    """The current UTC time of day on ``today()``; stamps writes the daily views read back."""
    current = utcnow()
    return datetime.combine(today(), current.time())


def parse_day(value: DayLike) -> date:
    """Normalise a date, datetime or ISO string to a UTC calendar day."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not text:
        raise ValueError("invalid_date")
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return parse_day(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        raise ValueError("invalid_date") from None


def parse_optional_day(value: Optional[DayLike]) -> Optional[date]:
    if value in (None, ""):
        return None
    return parse_day(value)


def day_start(day: date) -> datetime:
    return datetime(day.year, day.month, day.day)


def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def day_of_week(day: date) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return (day.weekday() + 1) % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
