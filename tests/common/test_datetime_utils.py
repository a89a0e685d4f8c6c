from datetime import date, datetime, time, timedelta, timezone

import pytest

from src.attendance_tracker.attendance_tracker.common.datetime_utils import LocalClock, parse_iso_date, weekday_name
from src.attendance_tracker.attendance_tracker.common.formatting import format_minutes, format_time_12h
from src.attendance_tracker.attendance_tracker.core.exceptions import ValidationError
from src.attendance_tracker.attendance_tracker.shifts.model import Shift
from src.attendance_tracker.attendance_tracker.users.model import Employee


def test_localize_converts_aware_and_keeps_naive():
    clock = LocalClock(2, "Africa/Cairo")

    utc = clock.localize(datetime(2026, 1, 31, 23, 30, tzinfo=timezone.utc))
    assert (utc.date(), utc.hour, utc.minute) == (date(2026, 2, 1), 1, 30)
    assert utc.utcoffset() == timedelta(hours=2)

    naive = clock.localize(datetime(2026, 2, 1, 9, 0))
    assert naive.hour == 9
    assert naive.tzinfo is clock.tzinfo


def test_today_follows_local_calendar():
    clock = LocalClock(2)
    assert clock.today(datetime(2026, 1, 31, 22, 30, tzinfo=timezone.utc)) == date(2026, 2, 1)


def test_weekday_name():
    assert weekday_name(date(2026, 2, 1)) == "sunday"
    assert weekday_name(date(2026, 2, 2)) == "monday"


def test_parse_iso_date():
    assert parse_iso_date(" 2026-02-01 ") == date(2026, 2, 1)
    with pytest.raises(ValidationError):
        parse_iso_date("01/02/2026")
    with pytest.raises(ValidationError):
        parse_iso_date(None)


def test_format_time_12h():
    assert format_time_12h(time(21, 5)) == "9:05 PM"
    assert format_time_12h(time(0, 0)) == "12:00 AM"
    assert format_time_12h(time(12, 30)) == "12:30 PM"
    assert format_time_12h(None) == "-"


def test_format_minutes():
    assert format_minutes(0) == "-"
    assert format_minutes(45) == "45m"
    assert format_minutes(65, suffix="late") == "1h 5m late"


def test_shift_needs_both_ends():
    assert Shift.from_times(time(9, 0), None) is None
    assert Employee(user_id=1, full_name="A", shift_start=time(9, 0)).shift_label() == "N/A"

    night = Shift.from_times(time(22, 0), time(6, 0))
    assert night.is_overnight
    assert night.label() == "22:00-06:00"


def test_off_day_is_case_insensitive():
    emp = Employee(user_id=1, full_name="A", off_day=" Friday ")
    assert emp.is_off_on("friday")
    assert not emp.is_off_on("sunday")
