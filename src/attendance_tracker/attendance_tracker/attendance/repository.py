from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, Optional, Protocol, Sequence, Set

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_user_ids_for_date(self, work_date: date, user_ids: Iterable[int]) -> Set[int]:
        """Which of `user_ids` already have a row on `work_date`."""

        raise NotImplementedError

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
        """Insert a new row; raises `DuplicateRecord` if (user, date) exists."""

        raise NotImplementedError

    def record_checkin(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        ip_address: Optional[str],
        status: AttendanceStatus,
        late_minutes: int,
    ) -> bool:
        """Fill check-in fields on an existing row that has none yet."""

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        early_departure_minutes: int,
    ) -> bool:
        raise NotImplementedError

    def create_absent(self, *, work_date: date, user_ids: Sequence[int]) -> int:
        """Bulk insert `absent` rows; returns how many were written."""

        raise NotImplementedError

    def count_by_status(self, work_date: date) -> Dict[AttendanceStatus, int]:
        raise NotImplementedError
