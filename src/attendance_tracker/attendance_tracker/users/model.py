from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.enums import Role
from ..shifts.model import Shift


@dataclass(frozen=True)
class Employee:
    """Domain entity: the slice of a user profile attendance rules care about.

    Plain data; created and edited by the employee management screens, read-only here.
    """

    user_id: int
    full_name: str
    role: Role = Role.EMPLOYEE
    shift_start: Optional[time] = None
    shift_end: Optional[time] = None
    off_day: Optional[str] = None
    is_active: bool = True

    @property
    def shift(self) -> Optional[Shift]:
        return Shift.from_times(self.shift_start, self.shift_end)

    def is_off_on(self, weekday: str) -> bool:
        return bool(self.off_day) and self.off_day.strip().lower() == weekday

    def shift_label(self) -> str:
        shift = self.shift
        return shift.label() if shift else "N/A"
