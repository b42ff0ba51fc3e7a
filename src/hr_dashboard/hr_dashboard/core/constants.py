"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 15
DEFAULT_BIRTHDAY_WINDOW_DAYS = 30
DEFAULT_DB_TIMEOUT_SECONDS = 10
DEFAULT_LOCAL_TIMEZONE = "UTC"

NO_OPEN_LOGS_MESSAGE = "No open logs to close"
DEFAULT_OVERVIEW_LIMIT = 200
ANNOUNCEMENT_TITLE_MAX_LENGTH = 120
ANNOUNCEMENT_BODY_MAX_LENGTH = 1000
