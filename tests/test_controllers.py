from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from conftest import InMemoryAttendance, InMemoryEmployees, cairo, employee
from src.attendance_tracker.attendance_tracker.absence.controller import register as register_absence
from src.attendance_tracker.attendance_tracker.absence.service import AbsenceService
from src.attendance_tracker.attendance_tracker.attendance.controller import register as register_attendance
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.common.datetime_utils import LocalClock
from src.attendance_tracker.attendance_tracker.core.exceptions import StoreFailure

CRON_SECRET = "test-cron-secret"


class FrozenClock(LocalClock):
    def __init__(self, frozen):
        super().__init__(2, "Africa/Cairo")
        self.frozen = frozen

    def now(self):
        return self.frozen


@pytest.fixture
def clock():
    return FrozenClock(cairo(2026, 2, 1, 9, 10))


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def app(attendance_repo, clock):
    employees = InMemoryEmployees(
        employee(1, "Day Worker", start="09:00", end="17:00"),
        employee(2, "Night Worker", start="22:00", end="06:00"),
    )
    container = SimpleNamespace(
        attendance_service=AttendanceService(attendance_repo, employees, clock=clock),
        absence_service=AbsenceService(attendance_repo, employees, clock=clock),
    )

    app = Flask(__name__)
    app.secret_key = "test"
    app.config["TESTING"] = True
    app.config["CRON_SECRET"] = CRON_SECRET
    register_attendance(app, container)
    register_absence(app, container)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, user_id, role="employee"):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_checkin_requires_session(client, attendance_repo):
    resp = client.post("/api/attendance/check-in")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "error": "Unauthorized"}
    assert attendance_repo.writes == 0


def test_checkin_records_forwarded_ip(client, attendance_repo):
    login(client, 1)

    resp = client.post("/api/attendance/check-in", headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["status"] == "late"
    assert body["data"]["late_minutes"] == 10
    assert body["data"]["ip_address"] == "203.0.113.9"
    assert body["data"]["message"] == "Checked in at 9:10 AM (10m late)"


def test_checkin_twice_is_rejected(client):
    login(client, 1)
    client.post("/api/attendance/check-in")

    resp = client.post("/api/attendance/check-in")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Already checked in today"


def test_checkin_outside_window(client, clock):
    clock.frozen = cairo(2026, 2, 1, 7, 0)
    login(client, 1)

    resp = client.post("/api/attendance/check-in")

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["reason"] == "too_early"
    assert body["window_start"] == "8:00 AM"
    assert body["window_end"] == "5:00 PM"


def test_checkout_without_checkin(client):
    login(client, 1)

    resp = client.post("/api/attendance/check-out")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Must check in before checking out"


def test_today_and_history(client, clock):
    login(client, 1)
    assert client.get("/api/attendance/today").get_json() == {"success": True}

    client.post("/api/attendance/check-in")
    clock.frozen = cairo(2026, 2, 1, 17, 5)
    client.post("/api/attendance/check-out")

    today = client.get("/api/attendance/today").get_json()["data"]
    assert today["date"] == "2026-02-01"

    history = client.get("/api/attendance/history?limit=5").get_json()["data"]
    assert len(history) == 1

    assert client.get("/api/attendance/history?limit=abc").status_code == 400


def test_stats_is_admin_only(client):
    login(client, 1)
    assert client.get("/api/attendance/stats").status_code == 403

    login(client, 1, role="admin")
    resp = client.get("/api/attendance/stats?date=2026-02-01")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["totalEmployees"] == 2

    assert client.get("/api/attendance/stats?date=01-02-2026").status_code == 400


def test_mark_absent_with_cron_token(client, clock, attendance_repo):
    clock.frozen = cairo(2026, 2, 1, 18, 0)

    resp = client.post("/api/attendance/mark-absent", headers={"Authorization": f"Bearer {CRON_SECRET}"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["markedAbsent"] == 2
    assert body["absentEmployees"] == ["Night Worker", "Day Worker"]
    assert len(attendance_repo.rows) == 2


def test_mark_absent_rejects_wrong_token_and_non_admin(client):
    resp = client.post("/api/attendance/mark-absent", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401

    login(client, 1)
    assert client.post("/api/attendance/mark-absent").status_code == 403


def test_mark_absent_preview_writes_nothing(client, clock, attendance_repo):
    clock.frozen = cairo(2026, 2, 1, 12, 0)
    login(client, 1, role="admin")

    body = client.get("/api/attendance/mark-absent").get_json()

    assert body["dayOfWeek"] == "sunday"
    assert body["shiftNotEndedCount"] == 1
    assert attendance_repo.writes == 0


def test_store_failure_is_hidden_from_client(app, client, attendance_repo, monkeypatch):
    def boom(**kwargs):
        raise StoreFailure("Table 'attendance' doesn't exist", errno=1146)

    monkeypatch.setattr(attendance_repo, "create_checkin", boom)
    login(client, 1)

    resp = client.post("/api/attendance/check-in")

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "Could not save attendance, please try again"
