from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Union


def format_time_12h(value: Optional[Union[time, datetime]]) -> str:
    """`time(21, 5)` -> `"9:05 PM"`."""
    if value is None:
        return "-"
    period = "PM" if value.hour >= 12 else "AM"
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {period}"


def format_minutes(minutes: int, *, suffix: str = "") -> str:
    if minutes <= 0:
        return "-"
    hours, mins = divmod(int(minutes), 60)
    text = f"{hours}h {mins}m" if hours else f"{mins}m"
    return f"{text} {suffix}".rstrip()


def format_hhmm(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value is not None else None
