from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, full_name, role, shift_start, shift_end, off_day, is_active"


def _to_employee(row: dict) -> Employee:
    return Employee(
        user_id=int(row["id"]),
        full_name=row["full_name"],
        role=Role(row["role"]),
        shift_start=normalize_mysql_time(row.get("shift_start")),
        shift_end=normalize_mysql_time(row.get("shift_end")),
        off_day=row.get("off_day") or None,
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_expected_on(self, weekday: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM profiles
                WHERE role=%s AND is_active=1
                  AND (off_day IS NULL OR off_day='' OR LOWER(off_day)<>%s)
                ORDER BY id
                """,
                (Role.EMPLOYEE.value, weekday.lower()),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM profiles WHERE role=%s AND is_active=1",
                (Role.EMPLOYEE.value,),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0
