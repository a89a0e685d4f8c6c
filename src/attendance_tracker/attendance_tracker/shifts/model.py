from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..common.datetime_utils import minutes_since_midnight
from ..common.formatting import format_hhmm


@dataclass(frozen=True)
class Shift:
    """Domain value: a daily shift as one start/end time-of-day pair."""

    start_time: time
    end_time: time

    @property
    def start_minutes(self) -> int:
        return minutes_since_midnight(self.start_time)

    @property
    def end_minutes(self) -> int:
        return minutes_since_midnight(self.end_time)

    @property
    def is_overnight(self) -> bool:
        return self.end_minutes < self.start_minutes

    def label(self) -> str:
        return f"{format_hhmm(self.start_time)}-{format_hhmm(self.end_time)}"

    @classmethod
    def from_times(cls, start: Optional[time], end: Optional[time]) -> Optional["Shift"]:
        """A profile only has a shift when both ends are configured."""
        if start is None or end is None:
            return None
        return cls(start_time=start, end_time=end)
