"""Settings shared by every environment module."""

import os

TIMEZONE_NAME = os.getenv("TIMEZONE_NAME", "Africa/Cairo")
# Single fixed offset, no daylight saving.
UTC_OFFSET_HOURS = float(os.getenv("UTC_OFFSET_HOURS", "2"))

# Check-in opens this many minutes before shift start.
CHECKIN_OPEN_MINUTES = int(os.getenv("CHECKIN_OPEN_MINUTES", "60"))

# Lets an unattended scheduler call the mark-absent endpoint.
CRON_SECRET = os.getenv("CRON_SECRET") or None

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}
