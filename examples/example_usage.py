"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the attendance rules live in the services.
"""

import importlib

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        utc_offset_hours=settings.UTC_OFFSET_HOURS,
        timezone_name=settings.TIMEZONE_NAME,
        checkin_open_minutes=settings.CHECKIN_OPEN_MINUTES,
    )
    print(container.attendance_service.daily_stats().to_dict())
    print(container.absence_service.preview().to_dict())


if __name__ == "__main__":
    main()
