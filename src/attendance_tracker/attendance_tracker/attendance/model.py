from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (user, attendance day).

    `work_date` is the attendance day, which for overnight shifts is the day
    the shift started rather than the day the punch happened.
    """

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    late_minutes: int = 0
    early_departure_minutes: int = 0
    ip_address: Optional[str] = None

    @property
    def is_checked_in(self) -> bool:
        return self.check_in_time is not None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out_time is not None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "check_in_time": self.check_in_time.isoformat() if self.check_in_time else None,
            "check_out_time": self.check_out_time.isoformat() if self.check_out_time else None,
            "status": self.status.value,
            "late_minutes": self.late_minutes,
            "early_departure_minutes": self.early_departure_minutes,
            "ip_address": self.ip_address,
        }


@dataclass(frozen=True)
class DailyStats:
    """Dashboard counters for one attendance day."""

    work_date: date
    total_employees: int
    present: int
    late: int
    absent: int

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "totalEmployees": self.total_employees,
            "presentToday": self.present,
            "lateToday": self.late,
            "absentToday": self.absent,
        }
