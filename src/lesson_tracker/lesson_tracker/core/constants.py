"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_RANGE_DAYS = 7
DEFAULT_SCHEDULE_LOOKBACK_MONTHS = 6
DEFAULT_API_TIMEOUT_SECONDS = 10.0

REGULAR_SECTION_TITLE = "Regular Students"
OTHER_SECTION_TITLE = "Make-up / Trial Students"
NAME_COLUMN_TITLE = "Student Name"

OFFLINE_MESSAGE = "You appear to be offline. Check your connection and try again."
