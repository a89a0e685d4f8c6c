from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import Shift
from ...shifts.window import compute_early_departure
from .base import AttendanceStrategy, StatusDecision


class EarlyDepartureStrategy(AttendanceStrategy):
    """Check-out before the shift end. Status stays whatever check-in decided."""

    def decide_checkin(self, *, now: datetime, shift_day: date, shift: Optional[Shift]) -> StatusDecision:
        raise TypeError("EarlyDepartureStrategy only applies to check-out")

    def decide_checkout(self, *, now: datetime, shift_day: date, shift: Optional[Shift], current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current, early_departure_minutes=compute_early_departure(shift, now, shift_day=shift_day))
