from __future__ import annotations

from dataclasses import dataclass

from .absence.service import AbsenceService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import LocalClock
from .core.constants import DEFAULT_CHECKIN_OPEN_MINUTES, DEFAULT_TIMEZONE_NAME, DEFAULT_UTC_OFFSET_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_employee_repository import MySQLEmployeeRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    clock: LocalClock

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository

    attendance_service: AttendanceService
    absence_service: AbsenceService


def _offset_string(hours: float) -> str:
    sign = "-" if hours < 0 else "+"
    total = int(round(abs(hours) * 60))
    return f"{sign}{total // 60:02d}:{total % 60:02d}"


def build_container(
    *,
    db_config: dict,
    utc_offset_hours: float = DEFAULT_UTC_OFFSET_HOURS,
    timezone_name: str = DEFAULT_TIMEZONE_NAME,
    checkin_open_minutes: int = DEFAULT_CHECKIN_OPEN_MINUTES,
) -> Container:
    clock = LocalClock(utc_offset_hours, timezone_name)
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config, time_zone=_offset_string(utc_offset_hours)))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn, tz=clock.tzinfo)

    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        clock=clock,
        strategy_factory=AttendanceStrategyFactory(),
        checkin_open_minutes=checkin_open_minutes,
    )
    absence_service = AbsenceService(attendance_repo, employees_repo, clock=clock)

    return Container(
        conn=conn,
        clock=clock,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        absence_service=absence_service,
    )
