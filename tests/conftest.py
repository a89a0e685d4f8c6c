from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.common.datetime_utils import LocalClock
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus, Role
from src.attendance_tracker.attendance_tracker.core.exceptions import DuplicateRecord
from src.attendance_tracker.attendance_tracker.users.model import Employee

CLOCK = LocalClock(2, "Africa/Cairo")


def cairo(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=CLOCK.tzinfo)


def employee(user_id: int, name: str = "", *, start: Optional[str] = None, end: Optional[str] = None, off_day=None) -> Employee:
    def _t(value):
        if value is None:
            return None
        h, m = value.split(":")
        return time(int(h), int(m))

    return Employee(
        user_id=user_id,
        full_name=name or f"Employee {user_id}",
        role=Role.EMPLOYEE,
        shift_start=_t(start),
        shift_end=_t(end),
        off_day=off_day,
    )


class InMemoryEmployees:
    def __init__(self, *employees: Employee):
        self.by_id = {e.user_id: e for e in employees}

    def add(self, e: Employee) -> None:
        self.by_id[e.user_id] = e

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return self.by_id.get(user_id)

    def list_expected_on(self, weekday: str):
        return [
            e for e in self.by_id.values()
            if e.role == Role.EMPLOYEE and e.is_active and not e.is_off_on(weekday)
        ]

    def count_active(self) -> int:
        return sum(1 for e in self.by_id.values() if e.role == Role.EMPLOYEE and e.is_active)


class InMemoryAttendance:
    """Enforces the (user_id, date) uniqueness the MySQL table has."""

    def __init__(self):
        self.rows: dict[tuple[int, date], AttendanceRecord] = {}
        self.writes = 0
        self._id = 0

    def _next_id(self) -> int:
        self._id += 1
        return self._id

    def _by_id(self, attendance_id: int):
        for key, rec in self.rows.items():
            if rec.attendance_id == attendance_id:
                return key, rec
        return None, None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self.rows.get((user_id, work_date))

    def get_recent_for_user(self, user_id: int, limit: int):
        items = [r for r in self.rows.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_user_ids_for_date(self, work_date: date, user_ids):
        wanted = set(user_ids)
        return {u for (u, d) in self.rows if d == work_date and u in wanted}

    def create_checkin(self, *, user_id, work_date, check_in_time, ip_address, status, late_minutes) -> int:
        if (user_id, work_date) in self.rows:
            raise DuplicateRecord("Duplicate entry for key 'uq_attendance_user_date'", errno=1062)
        self.writes += 1
        rec = AttendanceRecord(
            attendance_id=self._next_id(),
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=status,
            late_minutes=late_minutes,
            ip_address=ip_address,
        )
        self.rows[(user_id, work_date)] = rec
        return rec.attendance_id

    def record_checkin(self, *, attendance_id, check_in_time, ip_address, status, late_minutes) -> bool:
        key, rec = self._by_id(attendance_id)
        if rec is None or rec.check_in_time is not None:
            return False
        self.writes += 1
        self.rows[key] = replace(
            rec, check_in_time=check_in_time, ip_address=ip_address, status=status, late_minutes=late_minutes
        )
        return True

    def update_checkout(self, *, attendance_id, check_out_time, early_departure_minutes) -> bool:
        key, rec = self._by_id(attendance_id)
        if rec is None or rec.check_out_time is not None:
            return False
        self.writes += 1
        self.rows[key] = replace(rec, check_out_time=check_out_time, early_departure_minutes=early_departure_minutes)
        return True

    def create_absent(self, *, work_date, user_ids) -> int:
        for user_id in user_ids:
            if (user_id, work_date) in self.rows:
                raise DuplicateRecord("Duplicate entry for key 'uq_attendance_user_date'", errno=1062)
        for user_id in user_ids:
            self.writes += 1
            self.rows[(user_id, work_date)] = AttendanceRecord(
                attendance_id=self._next_id(),
                user_id=user_id,
                work_date=work_date,
                check_in_time=None,
                check_out_time=None,
                status=AttendanceStatus.ABSENT,
            )
        return len(user_ids)

    def count_by_status(self, work_date: date):
        counts = {s: 0 for s in AttendanceStatus}
        for (_, d), rec in self.rows.items():
            if d == work_date:
                counts[rec.status] += 1
        return counts


@pytest.fixture
def clock() -> LocalClock:
    return CLOCK


@pytest.fixture
def fixed_now() -> datetime:
    # Sunday 1 Feb 2026, 08:55 Cairo time.
    return cairo(2026, 2, 1, 8, 55)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(
        employee(1, "Day Worker", start="09:00", end="17:00"),
        employee(2, "Night Worker", start="22:00", end="06:00"),
        employee(3, "Flexible", start=None, end=None),
    )
