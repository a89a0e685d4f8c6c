import os

from .config import CHECKIN_OPEN_MINUTES, DB_CONFIG, TIMEZONE_NAME, UTC_OFFSET_HOURS  # noqa: F401

SECRET_KEY = "test-secret"
CRON_SECRET = "test-cron-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
