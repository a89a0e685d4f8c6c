from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import Shift
from ...shifts.window import compute_lateness
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after the shift start of its attendance day."""

    def decide_checkin(self, *, now: datetime, shift_day: date, shift: Optional[Shift]) -> StatusDecision:
        minutes = compute_lateness(shift.start_time if shift else None, now, shift_day=shift_day)
        return StatusDecision(status=AttendanceStatus.LATE, late_minutes=minutes)

    def decide_checkout(self, *, now: datetime, shift_day: date, shift: Optional[Shift], current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
