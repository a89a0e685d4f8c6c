from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from ..core.constants import DEFAULT_TIMEZONE_NAME, DEFAULT_UTC_OFFSET_HOURS, WEEKDAY_NAMES
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def minutes_since_midnight(value) -> int:
    """Wall-clock minutes of a `time` or `datetime` (seconds are dropped)."""
    return value.hour * 60 + value.minute


def weekday_name(value: date) -> str:
    return WEEKDAY_NAMES[value.weekday()]


def at_time(day: date, t: time, tzinfo=None) -> datetime:
    return datetime.combine(day, t).replace(tzinfo=tzinfo)


class LocalClock:
    """The one place that knows the business timezone.

    A single fixed UTC offset is used (no daylight saving). Every operation
    localizes its reference instant once and derives the wall-clock minutes,
    calendar day and weekday from the result.
    """

    def __init__(self, utc_offset_hours: float = DEFAULT_UTC_OFFSET_HOURS, name: str = DEFAULT_TIMEZONE_NAME):
        self.name = name
        self.tzinfo = timezone(timedelta(hours=utc_offset_hours), name)

    def now(self) -> datetime:
        return datetime.now(self.tzinfo)

    def localize(self, value: Optional[datetime] = None) -> datetime:
        """Convert to local wall time.

        Note: naive datetimes are taken to be local wall time already.
        """
        if value is None:
            return self.now()
        if value.tzinfo is None:
            return value.replace(tzinfo=self.tzinfo)
        return value.astimezone(self.tzinfo)

    def today(self, value: Optional[datetime] = None) -> date:
        return self.localize(value).date()

    def __repr__(self) -> str:
        return f"LocalClock({self.name!r}, {self.tzinfo.utcoffset(None)})"
