"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_HOURS = 24
DEFAULT_UTC_OFFSET_HOURS = 3
DEFAULT_LATE_CUTOFF = "08:30"

MIN_PASSWORD_LENGTH = 6
MIN_SEARCH_LENGTH = 2
SEARCH_LIMIT = 10
SUGGESTION_LIMIT = 3

DEFAULT_TREND_DAYS = 7
RECENT_ACTIVITY_DAYS = 7
RECENT_ATTENDANCE_LIMIT = 10
RECENT_EMPLOYEE_LIMIT = 5
RECENT_ACTIVITY_LIMIT = 15

DEFAULT_FACE_QUALITY = 0.8

CSV_EXPORT_COLUMNS = (
    "attendance_id",
    "employee_id",
    "name",
    "email",
    "phone",
    "department",
    "position",
    "status",
    "timestamp",
)
