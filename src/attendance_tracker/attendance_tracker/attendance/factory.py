from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..shifts.model import Shift
from ..shifts.window import compute_early_departure, compute_lateness
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyDepartureStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Picks the strategy from lateness (check-in) or early departure (check-out)."""

    def for_checkin(self, *, now: datetime, shift_day: date, shift: Optional[Shift]) -> AttendanceStrategy:
        if not shift:
            return NormalStrategy()

        if compute_lateness(shift.start_time, now, shift_day=shift_day) > 0:
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, now: datetime, shift_day: date, shift: Optional[Shift]) -> AttendanceStrategy:
        if not shift:
            return NormalStrategy()

        if compute_early_departure(shift, now, shift_day=shift_day) > 0:
            return EarlyDepartureStrategy()
        return NormalStrategy()
