from datetime import date, datetime

from conftest import CLOCK, cairo
from src.attendance_tracker.attendance_tracker.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus


class RowsCursor:
    def __init__(self, rows):
        self.rows = rows
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return list(self.rows)

    def close(self):
        pass


class RowsConnection:
    def __init__(self, rows):
        self.cur = RowsCursor(rows)

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class RowsFactory:
    def __init__(self, rows):
        self.rows = rows

    def connect(self):
        return RowsConnection(self.rows)


def _row(**overrides):
    row = {
        "id": 7,
        "user_id": 1,
        "date": date(2026, 2, 1),
        "check_in_time": datetime(2026, 2, 1, 9, 10),
        "check_out_time": datetime(2026, 2, 1, 17, 5),
        "status": "late",
        "late_minutes": 10,
        "early_departure_minutes": 0,
        "ip_address": "203.0.113.9",
    }
    row.update(overrides)
    return row


def test_stored_wall_time_is_read_back_with_offset():
    repo = MySQLAttendanceRepository(RowsFactory([_row()]), tz=CLOCK.tzinfo)

    rec = repo.get_for_user_and_date(1, date(2026, 2, 1))

    assert rec.status == AttendanceStatus.LATE
    assert rec.check_in_time == cairo(2026, 2, 1, 9, 10)
    assert rec.to_dict()["check_in_time"] == "2026-02-01T09:10:00+02:00"
    assert rec.to_dict()["check_out_time"] == "2026-02-01T17:05:00+02:00"


def test_history_rows_match_checkin_payload_format():
    repo = MySQLAttendanceRepository(
        RowsFactory([
            _row(),
            _row(id=6, date=date(2026, 1, 31), check_in_time=datetime(2026, 1, 31, 8, 50),
                 check_out_time=None, status="present", late_minutes=0),
        ]),
        tz=CLOCK.tzinfo,
    )

    records = repo.get_recent_for_user(1, 5)

    assert [r.check_in_time.utcoffset().total_seconds() for r in records] == [7200, 7200]
    assert records[1].check_out_time is None


def test_absent_row_keeps_empty_times():
    repo = MySQLAttendanceRepository(
        RowsFactory([_row(check_in_time=None, check_out_time=None, status="absent", late_minutes=0)]),
        tz=CLOCK.tzinfo,
    )

    rec = repo.get_for_user_and_date(1, date(2026, 2, 1))

    assert rec.status == AttendanceStatus.ABSENT
    assert rec.check_in_time is None and rec.check_out_time is None
