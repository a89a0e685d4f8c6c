from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_api, ok, require_admin


def register(app: Flask, container) -> None:
    service = container.absence_service
    cron_secret = app.config.get("CRON_SECRET")

    def _override_date():
        date_s = request.args.get("date")
        return parse_iso_date(date_s) if date_s else None

    @app.route("/api/attendance/mark-absent", methods=["POST"], endpoint="api_mark_absent")
    @json_api
    def mark_absent():
        require_admin(cron_secret)
        result = service.sweep(override_date=_override_date())
        return ok(**result.to_dict())

    @app.route("/api/attendance/mark-absent", methods=["GET"], endpoint="api_mark_absent_preview")
    @json_api
    def mark_absent_preview():
        """Dry run: who would be marked absent right now."""
        require_admin(cron_secret)
        preview = service.preview(override_date=_override_date())
        return ok(**preview.to_dict())
