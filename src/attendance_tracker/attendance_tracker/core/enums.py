from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Profile role used for route authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Attendance status as persisted in the `attendance` table."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class WindowReason(str, Enum):
    """Why a check-in was refused by the shift window."""

    TOO_EARLY = "too_early"
    SHIFT_ENDED = "shift_ended"
