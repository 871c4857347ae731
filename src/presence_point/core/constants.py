"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SCAN_GAP_MS = 100
TERMINATOR_KEYS = frozenset({"Enter", "Return", "\n", "\r"})

# Lesson reference stored on scanned records until lessons can be matched.
PLACEHOLDER_LESSON_ID = "00000000-0000-0000-0000-000000000000"
SCAN_NOTE = "Registrerad via NFC-skanning"

DEFAULT_SESSION_DAYS = 7
DEFAULT_WINDOW_DAYS = 7
DEFAULT_TIMEZONE = "Europe/Stockholm"
ABSENCE_NOTICE_LIMIT = 20
PROFILE_HISTORY_LIMIT = 50
NOTICE_BOARD_SIZE = 50

# Postgres SQLSTATE for unique_violation.
UNIQUE_VIOLATION = "23505"

WEEKDAYS = ["Måndag", "Tisdag", "Onsdag", "Torsdag", "Fredag"]
FIRST_SLOT_HOUR = 8
SLOT_COUNT = 10
