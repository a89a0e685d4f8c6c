from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import Shift


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    late_minutes: int = 0
    early_departure_minutes: int = 0


class AttendanceStrategy(ABC):
    """Decides what a check-in or check-out records: status and minute counts.

    Picked per request by `AttendanceStrategyFactory`.
    """

    @abstractmethod
    def decide_checkin(self, *, now: datetime, shift_day: date, shift: Optional[Shift]) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(self, *, now: datetime, shift_day: date, shift: Optional[Shift], current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
