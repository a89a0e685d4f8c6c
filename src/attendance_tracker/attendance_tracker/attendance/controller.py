from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import client_ip, current_user_id, json_api, ok, require_admin
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import ValidationError


def register(app: Flask, container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @json_api
    def check_in():
        result = service.check_in(current_user_id(), ip_address=client_ip())
        return ok(result.to_dict())

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    @json_api
    def check_out():
        result = service.check_out(current_user_id())
        return ok(result.to_dict())

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    @json_api
    def today():
        record = service.get_today_record(current_user_id())
        return ok(record.to_dict() if record else None)

    @app.route("/api/attendance/history", methods=["GET"], endpoint="api_attendance_history")
    @json_api
    def history():
        try:
            limit = int(request.args.get("limit", DEFAULT_HISTORY_LIMIT))
        except ValueError:
            raise ValidationError("limit must be an integer") from None
        records = service.get_history(current_user_id(), limit=limit)
        return ok([r.to_dict() for r in records])

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="api_attendance_stats")
    @json_api
    def stats():
        require_admin()
        date_s = request.args.get("date")
        work_date = parse_iso_date(date_s) if date_s else None
        return ok(service.daily_stats(work_date).to_dict())
