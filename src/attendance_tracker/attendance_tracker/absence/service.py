from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import LocalClock, weekday_name
from ..core.exceptions import DuplicateRecord
from ..shifts.window import has_shift_ended, target_attendance_date
from ..users.model import Employee
from ..users.repository import EmployeeRepository

logger = logging.getLogger(__name__)

# A check-in landing between the scan and the insert makes the group insert
# fail on the (user_id, date) key; rescan and retry this many times.
_INSERT_ATTEMPTS = 3


def _describe(employee: Employee) -> str:
    return f"{employee.full_name} (shift: {employee.shift_label()})"


@dataclass(frozen=True)
class SweepResult:
    current_time: datetime
    marked_absent: int
    already_recorded: int
    skipped_shift_not_ended: int
    absent_employee_names: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "message": f"Marked {self.marked_absent} employee(s) as absent",
            "markedAbsent": self.marked_absent,
            "alreadyRecorded": self.already_recorded,
            "skippedShiftNotEnded": self.skipped_shift_not_ended,
            "currentTime": self.current_time.isoformat(),
            "absentEmployees": list(self.absent_employee_names),
        }


@dataclass(frozen=True)
class DateGroupPreview:
    work_date: date
    would_be_absent: List[str]
    already_recorded: int

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "wouldBeMarkedAbsent": len(self.would_be_absent),
            "employees": list(self.would_be_absent),
            "alreadyRecorded": self.already_recorded,
        }


@dataclass(frozen=True)
class SweepPreview:
    current_time: datetime
    weekday: str
    total_employees: int
    shift_ended_count: int
    shift_not_ended: List[str]
    by_date: List[DateGroupPreview]

    def to_dict(self) -> dict:
        return {
            "currentTime": self.current_time.isoformat(),
            "dayOfWeek": self.weekday,
            "totalEmployees": self.total_employees,
            "shiftEndedCount": self.shift_ended_count,
            "shiftNotEndedCount": len(self.shift_not_ended),
            "shiftNotEndedEmployees": list(self.shift_not_ended),
            "byDate": [g.to_dict() for g in self.by_date],
        }


@dataclass(frozen=True)
class _SweepPlan:
    now: datetime
    weekday: str
    expected: Sequence[Employee]
    not_ended: Sequence[Employee]
    groups: Dict[date, List[Employee]]


class AbsenceService:
    """End-of-shift sweep: file an `absent` row for everyone who never checked in.

    Only employees without any row for the target day are touched, so running
    the sweep again for the same day inserts nothing. A check-in racing the
    insert is rescanned and skipped. Concurrent sweeps are not guarded here;
    schedule a single trigger.
    """

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository, *, clock: Optional[LocalClock] = None):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock or LocalClock()

    def _plan(self, now: Optional[datetime], override_date: Optional[date]) -> _SweepPlan:
        now = self._clock.localize(now)
        weekday = weekday_name(now.date())

        # Off-day employees are filtered by the repository query itself.
        expected = [e for e in self._employees.list_expected_on(weekday) if not e.is_off_on(weekday)]

        not_ended: List[Employee] = []
        groups: Dict[date, List[Employee]] = {}
        for employee in expected:
            shift = employee.shift
            if not has_shift_ended(shift, now):
                not_ended.append(employee)
                continue
            work_date = override_date or target_attendance_date(shift, now)
            groups.setdefault(work_date, []).append(employee)

        return _SweepPlan(now=now, weekday=weekday, expected=expected, not_ended=not_ended, groups=groups)

    def _split_group(self, work_date: date, employees: List[Employee]) -> Tuple[List[Employee], int]:
        recorded = self._attendance.list_user_ids_for_date(work_date, [e.user_id for e in employees])
        missing = [e for e in employees if e.user_id not in recorded]
        return missing, len(recorded)

    def _insert_missing(self, work_date: date, employees: List[Employee]) -> Tuple[List[Employee], int]:
        """Insert absent rows for the group; returns (newly absent, already recorded)."""
        for attempt in range(1, _INSERT_ATTEMPTS + 1):
            missing, recorded = self._split_group(work_date, employees)
            if not missing:
                return [], recorded
            try:
                self._attendance.create_absent(work_date=work_date, user_ids=[e.user_id for e in missing])
                return missing, recorded
            except DuplicateRecord:
                if attempt == _INSERT_ATTEMPTS:
                    raise
                logger.warning("absent insert for %s collided with a check-in (attempt %s), rescanning", work_date, attempt)

    def sweep(self, *, now: Optional[datetime] = None, override_date: Optional[date] = None) -> SweepResult:
        plan = self._plan(now, override_date)

        marked = 0
        already = 0
        names: List[str] = []
        for work_date in sorted(plan.groups):
            missing, recorded = self._insert_missing(work_date, plan.groups[work_date])
            already += recorded
            if not missing:
                continue

            marked += len(missing)
            names.extend(e.full_name for e in missing)
            logger.info("marked %s absent for %s (already recorded: %s)", len(missing), work_date, recorded)

        result = SweepResult(
            current_time=plan.now,
            marked_absent=marked,
            already_recorded=already,
            skipped_shift_not_ended=len(plan.not_ended),
            absent_employee_names=names,
        )
        logger.info(
            "absence sweep at %s (%s): marked=%s already=%s skipped=%s",
            plan.now.isoformat(), plan.weekday, marked, already, result.skipped_shift_not_ended,
        )
        return result

    def preview(self, *, now: Optional[datetime] = None, override_date: Optional[date] = None) -> SweepPreview:
        """Same computation as `sweep` without writing anything."""
        plan = self._plan(now, override_date)

        by_date: List[DateGroupPreview] = []
        for work_date in sorted(plan.groups):
            missing, recorded = self._split_group(work_date, plan.groups[work_date])
            by_date.append(
                DateGroupPreview(
                    work_date=work_date,
                    would_be_absent=[_describe(e) for e in missing],
                    already_recorded=recorded,
                )
            )

        return SweepPreview(
            current_time=plan.now,
            weekday=plan.weekday,
            total_employees=len(plan.expected),
            shift_ended_count=sum(len(g) for g in plan.groups.values()),
            shift_not_ended=[_describe(e) for e in plan.not_ended],
            by_date=by_date,
        )
