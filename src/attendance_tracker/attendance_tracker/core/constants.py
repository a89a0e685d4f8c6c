"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_TIMEZONE_NAME = "Africa/Cairo"
DEFAULT_UTC_OFFSET_HOURS = 2
DEFAULT_CHECKIN_OPEN_MINUTES = 60
DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 366

# Index matches datetime.weekday() (Monday == 0).
WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

UNKNOWN_IP = "Unknown"
