"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

QR_FRESHNESS_SECONDS = 60
RESCAN_DELAY_SECONDS = 3

DEFAULT_RECORDS_LIMIT = 100
DEFAULT_EMPLOYEE_HISTORY_LIMIT = 50

DEFAULT_WORK_START = "09:00"
DEFAULT_LATE_GRACE_MINUTES = 15
DEFAULT_LUNCH_START = "12:00"
DEFAULT_LUNCH_END = "14:00"
DEFAULT_WORK_END = "18:00"
