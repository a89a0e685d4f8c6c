"""Shift window rules.

Pure functions over a `Shift` and a *local* reference instant (see
`LocalClock.localize`). Nothing here performs I/O or reads the clock.

Overnight shifts (end earlier than start, e.g. 22:00-06:00) are the only
source of complexity: the check-in window, the shift end instant and the
attendance day all wrap around midnight for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import at_time, minutes_since_midnight
from ..core.constants import DEFAULT_CHECKIN_OPEN_MINUTES, MINUTES_PER_DAY
from ..core.enums import WindowReason
from .model import Shift

ONE_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True)
class WindowCheck:
    allowed: bool
    reason: Optional[WindowReason] = None
    window_start: Optional[time] = None
    window_end: Optional[time] = None


def is_overnight(start: time, end: time) -> bool:
    return minutes_since_midnight(end) < minutes_since_midnight(start)


def window_opens_at(shift: Shift, *, open_minutes: int = DEFAULT_CHECKIN_OPEN_MINUTES) -> time:
    minutes = (shift.start_minutes - open_minutes) % MINUTES_PER_DAY
    return time(hour=minutes // 60, minute=minutes % 60)


def is_wrapped_window(shift: Shift, *, open_minutes: int = DEFAULT_CHECKIN_OPEN_MINUTES) -> bool:
    """True when the check-in window spans midnight.

    Always the case for overnight shifts; also for day shifts starting within
    `open_minutes` of midnight (a 00:30 shift opens at 23:30 the day before).
    """
    return shift.is_overnight or shift.start_minutes < open_minutes


def check_in_window(
    shift: Optional[Shift],
    now: datetime,
    *,
    open_minutes: int = DEFAULT_CHECKIN_OPEN_MINUTES,
) -> WindowCheck:
    """Is `now` inside [shift start - open_minutes, shift end]? Inclusive on both ends."""
    if shift is None:
        return WindowCheck(allowed=True)

    opens_at = window_opens_at(shift, open_minutes=open_minutes)
    open_m = minutes_since_midnight(opens_at)
    end_m = shift.end_minutes
    now_m = minutes_since_midnight(now)

    if is_wrapped_window(shift, open_minutes=open_minutes):
        allowed = now_m >= open_m or now_m <= end_m
    else:
        allowed = open_m <= now_m <= end_m

    if allowed:
        return WindowCheck(allowed=True, window_start=opens_at, window_end=shift.end_time)

    if is_wrapped_window(shift, open_minutes=open_minutes):
        # Dead zone between end and the next opening: blame the nearer boundary.
        reason = WindowReason.SHIFT_ENDED if now_m - end_m < open_m - now_m else WindowReason.TOO_EARLY
    else:
        reason = WindowReason.TOO_EARLY if now_m < open_m else WindowReason.SHIFT_ENDED

    return WindowCheck(allowed=False, reason=reason, window_start=opens_at, window_end=shift.end_time)


def compute_lateness(start: Optional[time], now: datetime, *, shift_day: Optional[date] = None) -> int:
    """Whole minutes `now` is past the shift start on `shift_day` (default: now's day)."""
    if start is None:
        return 0
    starts_at = at_time(shift_day or now.date(), start, now.tzinfo)
    if now <= starts_at:
        return 0
    return (now - starts_at) // ONE_MINUTE


def shift_end_instant(shift: Shift, now: datetime, *, shift_day: Optional[date] = None) -> datetime:
    """End of the shift instance `now` belongs to.

    Without `shift_day`: for an overnight shift, once today's start has passed
    the end is tomorrow; before that we are in the early-morning tail of
    yesterday's shift. With `shift_day`, the instance starting that day.
    """
    if shift_day is not None:
        end_day = shift_day + timedelta(days=1) if shift.is_overnight else shift_day
        return at_time(end_day, shift.end_time, now.tzinfo)

    ends_at = at_time(now.date(), shift.end_time, now.tzinfo)
    if shift.is_overnight and now >= at_time(now.date(), shift.start_time, now.tzinfo):
        ends_at += timedelta(days=1)
    return ends_at


def compute_early_departure(shift: Optional[Shift], now: datetime, *, shift_day: Optional[date] = None) -> int:
    if shift is None:
        return 0
    return max(0, (shift_end_instant(shift, now, shift_day=shift_day) - now) // ONE_MINUTE)


def has_shift_ended(shift: Optional[Shift], now: datetime) -> bool:
    """Whether an absence sweep may consider this shift closed.

    No shift configured counts as ended. An overnight shift has only ended in
    the gap between its end and the next start.
    """
    if shift is None:
        return True

    now_m = minutes_since_midnight(now)
    if shift.is_overnight:
        return shift.end_minutes <= now_m < shift.start_minutes
    return now_m >= shift.end_minutes


def target_attendance_date(shift: Optional[Shift], now: datetime) -> date:
    """Attendance day of the shift that has just closed at `now`."""
    today = now.date()
    if shift is not None and shift.is_overnight and has_shift_ended(shift, now):
        # has_shift_ended already implies now < start: the closed shift began yesterday.
        return today - timedelta(days=1)
    return today


def attendance_date_for(
    shift: Optional[Shift],
    now: datetime,
    *,
    open_minutes: int = DEFAULT_CHECKIN_OPEN_MINUTES,
) -> date:
    """Attendance day a check-in or check-out at `now` is filed under."""
    today = now.date()
    if shift is None:
        return today

    now_m = minutes_since_midnight(now)
    open_m = minutes_since_midnight(window_opens_at(shift, open_minutes=open_minutes))

    if shift.is_overnight:
        # Before tonight's window opens we are still on the shift that began yesterday.
        return today if now_m >= open_m else today - timedelta(days=1)

    if is_wrapped_window(shift, open_minutes=open_minutes) and shift.end_minutes < now_m and now_m >= open_m:
        # Evening side of a window that opens before midnight: tomorrow's shift.
        return today + timedelta(days=1)
    return today
