import os

from .config import CHECKIN_OPEN_MINUTES, CRON_SECRET, DB_CONFIG, TIMEZONE_NAME, UTC_OFFSET_HOURS  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
