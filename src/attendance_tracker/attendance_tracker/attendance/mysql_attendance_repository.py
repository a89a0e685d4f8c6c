from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Dict, Iterable, Optional, Sequence, Set

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "id, user_id, date, check_in_time, check_out_time, status, "
    "late_minutes, early_departure_minutes, ip_address"
)


def _local(value: Optional[datetime], tz: Optional[tzinfo]) -> Optional[datetime]:
    # DATETIME columns hold local wall time without an offset.
    if value is None or tz is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=tz)


def _to_record(r: dict, tz: Optional[tzinfo] = None) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        user_id=int(r["user_id"]),
        work_date=r["date"],
        check_in_time=_local(r.get("check_in_time"), tz),
        check_out_time=_local(r.get("check_out_time"), tz),
        status=AttendanceStatus(r["status"]),
        late_minutes=int(r.get("late_minutes") or 0),
        early_departure_minutes=int(r.get("early_departure_minutes") or 0),
        ip_address=r.get("ip_address"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, tz: Optional[tzinfo] = None):
        self._conn_factory = conn_factory
        self._tz = tz

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE user_id=%s AND date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r, self._tz) if r else None

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE user_id=%s
                ORDER BY date DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_record(r, self._tz) for r in fetchall(cur)]

    def list_user_ids_for_date(self, work_date: date, user_ids: Iterable[int]) -> Set[int]:
        ids = [int(u) for u in user_ids]
        if not ids:
            return set()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT user_id FROM attendance WHERE date=%s AND user_id IN ({in_clause(ids)})",
                (work_date, *ids),
            )
            return {int(r["user_id"]) for r in fetchall(cur)}

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        ip_address: Optional[str],
        status: AttendanceStatus,
        late_minutes: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, date, check_in_time, ip_address, status, late_minutes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (user_id, work_date, check_in_time, ip_address, status.value, int(late_minutes)),
            )
            return int(cur.lastrowid)

    def record_checkin(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        ip_address: Optional[str],
        status: AttendanceStatus,
        late_minutes: int,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Guarded on check_in_time IS NULL so a concurrent check-in cannot be overwritten.
            cur.execute(
                """
                UPDATE attendance
                SET check_in_time=%s, ip_address=%s, status=%s, late_minutes=%s
                WHERE id=%s AND check_in_time IS NULL
                """,
                (check_in_time, ip_address, status.value, int(late_minutes), int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        early_departure_minutes: int,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s, early_departure_minutes=%s
                WHERE id=%s AND check_out_time IS NULL
                """,
                (check_out_time, int(early_departure_minutes), int(attendance_id)),
            )
            return cur.rowcount > 0

    def create_absent(self, *, work_date: date, user_ids: Sequence[int]) -> int:
        if not user_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance(user_id, date, status, check_in_time, check_out_time, late_minutes)
                VALUES(%s,%s,%s,NULL,NULL,0)
                """,
                [(int(u), work_date, AttendanceStatus.ABSENT.value) for u in user_ids],
            )
            return len(user_ids)

    def count_by_status(self, work_date: date) -> Dict[AttendanceStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status, COUNT(*) AS total FROM attendance WHERE date=%s GROUP BY status",
                (work_date,),
            )
            counts = {status: 0 for status in AttendanceStatus}
            for r in fetchall(cur):
                counts[AttendanceStatus(r["status"])] = int(r["total"])
            return counts
