"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

PROBE_COLLECTION = "test"
CONNECT_TIMEOUT_MS = 30000
AUTH_SOURCE = "admin"
URI_PREVIEW_CHARS = 50

ATTENDANCE_COLLECTION = "attendances"
CLASS_COLLECTION = "classes"
