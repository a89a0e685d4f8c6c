from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import LocalClock
from ..common.formatting import format_minutes, format_time_12h
from ..core.constants import DEFAULT_CHECKIN_OPEN_MINUTES, DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT, UNKNOWN_IP
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    AuthenticationError,
    DuplicateRecord,
    NotCheckedIn,
    ValidationError,
    WindowViolation,
)
from ..shifts.window import attendance_date_for, check_in_window
from ..users.model import Employee
from ..users.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, DailyStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _message(action: str, at: datetime, minutes: int, label: str) -> str:
    text = f"{action} at {format_time_12h(at)}"
    return f"{text} ({format_minutes(minutes, suffix=label)})" if minutes > 0 else text


@dataclass(frozen=True)
class CheckInResult:
    work_date: date
    check_in_time: datetime
    ip_address: str
    late_minutes: int
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "check_in_time": self.check_in_time.isoformat(),
            "ip_address": self.ip_address,
            "late_minutes": self.late_minutes,
            "status": self.status.value,
            "message": _message("Checked in", self.check_in_time, self.late_minutes, "late"),
        }


@dataclass(frozen=True)
class CheckOutResult:
    work_date: date
    check_out_time: datetime
    early_departure_minutes: int

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "check_out_time": self.check_out_time.isoformat(),
            "early_departure_minutes": self.early_departure_minutes,
            "message": _message("Checked out", self.check_out_time, self.early_departure_minutes, "early"),
        }


class AttendanceService:
    """Check-in / check-out use cases.

    Every validation happens before the single write each call performs, so a
    rejected request leaves nothing behind.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Optional[LocalClock] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        checkin_open_minutes: int = DEFAULT_CHECKIN_OPEN_MINUTES,
    ):
        if not 0 <= int(checkin_open_minutes) < 24 * 60:
            raise ValueError("checkin_open_minutes must be within one day")
        self._attendance = attendance
        self._employees = employees
        self._clock = clock or LocalClock()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._open_minutes = int(checkin_open_minutes)

    def _require_employee(self, user_id: Optional[int]) -> Employee:
        if user_id is None:
            raise AuthenticationError("Unauthorized")
        employee = self._employees.get_by_id(user_id)
        if not employee:
            raise ValidationError("Employee not found")
        return employee

    def check_in(self, user_id: Optional[int], *, now: Optional[datetime] = None, ip_address: Optional[str] = None) -> CheckInResult:
        employee = self._require_employee(user_id)
        now = self._clock.localize(now)
        shift = employee.shift

        window = check_in_window(shift, now, open_minutes=self._open_minutes)
        if not window.allowed:
            logger.warning("check-in refused user=%s at=%s reason=%s", employee.user_id, now.isoformat(), window.reason.value)
            raise WindowViolation(
                window.reason,
                window_start=format_time_12h(window.window_start),
                window_end=format_time_12h(window.window_end),
            )

        work_date = attendance_date_for(shift, now, open_minutes=self._open_minutes)
        strategy = self._factory.for_checkin(now=now, shift_day=work_date, shift=shift)
        decision = strategy.decide_checkin(now=now, shift_day=work_date, shift=shift)
        ip_address = ip_address or UNKNOWN_IP

        existing = self._attendance.get_for_user_and_date(employee.user_id, work_date)
        if existing and existing.is_checked_in:
            raise AlreadyCheckedIn()

        if existing:
            # Provisional absent row from the sweeper: the check-in supersedes it.
            updated = self._attendance.record_checkin(
                attendance_id=existing.attendance_id,
                check_in_time=now,
                ip_address=ip_address,
                status=decision.status,
                late_minutes=decision.late_minutes,
            )
            if not updated:
                raise AlreadyCheckedIn()
            logger.info("check-in replaced %s row user=%s date=%s", existing.status.value, employee.user_id, work_date)
        else:
            try:
                self._attendance.create_checkin(
                    user_id=employee.user_id,
                    work_date=work_date,
                    check_in_time=now,
                    ip_address=ip_address,
                    status=decision.status,
                    late_minutes=decision.late_minutes,
                )
            except DuplicateRecord:
                logger.warning("concurrent check-in detected user=%s date=%s", employee.user_id, work_date)
                raise AlreadyCheckedIn() from None

        logger.info(
            "check-in user=%s date=%s status=%s late_minutes=%s",
            employee.user_id, work_date, decision.status.value, decision.late_minutes,
        )
        return CheckInResult(
            work_date=work_date,
            check_in_time=now,
            ip_address=ip_address,
            late_minutes=decision.late_minutes,
            status=decision.status,
        )

    def check_out(self, user_id: Optional[int], *, now: Optional[datetime] = None) -> CheckOutResult:
        employee = self._require_employee(user_id)
        now = self._clock.localize(now)
        shift = employee.shift
        work_date = attendance_date_for(shift, now, open_minutes=self._open_minutes)

        record = self._attendance.get_for_user_and_date(employee.user_id, work_date)
        if not record or not record.is_checked_in:
            raise NotCheckedIn()
        if record.is_checked_out:
            raise AlreadyCheckedOut()

        strategy = self._factory.for_checkout(now=now, shift_day=work_date, shift=shift)
        decision = strategy.decide_checkout(now=now, shift_day=work_date, shift=shift, current=record.status)

        if not self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            early_departure_minutes=decision.early_departure_minutes,
        ):
            raise AlreadyCheckedOut()

        logger.info(
            "check-out user=%s date=%s early_departure_minutes=%s",
            employee.user_id, work_date, decision.early_departure_minutes,
        )
        return CheckOutResult(
            work_date=work_date,
            check_out_time=now,
            early_departure_minutes=decision.early_departure_minutes,
        )

    def get_today_record(self, user_id: Optional[int], *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        """Record for the attendance day `now` falls in (drives the portal buttons)."""
        employee = self._require_employee(user_id)
        now = self._clock.localize(now)
        work_date = attendance_date_for(employee.shift, now, open_minutes=self._open_minutes)
        return self._attendance.get_for_user_and_date(employee.user_id, work_date)

    def get_history(self, user_id: Optional[int], *, limit: int = DEFAULT_HISTORY_LIMIT):
        if user_id is None:
            raise AuthenticationError("Unauthorized")
        limit = max(1, min(int(limit), MAX_HISTORY_LIMIT))
        return list(self._attendance.get_recent_for_user(user_id, limit))

    def daily_stats(self, work_date: Optional[date] = None) -> DailyStats:
        work_date = work_date or self._clock.today()
        counts = self._attendance.count_by_status(work_date)
        return DailyStats(
            work_date=work_date,
            total_employees=self._employees.count_active(),
            present=counts.get(AttendanceStatus.PRESENT, 0),
            late=counts.get(AttendanceStatus.LATE, 0),
            absent=counts.get(AttendanceStatus.ABSENT, 0),
        )
