"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_PERIOD_NUMBER = 1
MAX_PERIOD_NUMBER = 12

DEFAULT_SESSION_DAYS = 7
RECENT_ATTENDANCE_LIMIT = 7

REPORT_CSV_HEADERS = [
    "Class",
    "Section",
    "Total Students",
    "Total Records",
    "Present",
    "Absent",
    "Late",
    "Attendance %",
]
REPORT_CSV_FILENAME = "attendance-report-{day}.csv"
