SECRET_KEY = "test-secret"

SUPABASE_CONFIG = {
    "url": "http://localhost:54321",
    "key": "test-key",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SCAN_GAP_MS = 100
SCAN_PLACEHOLDER_LESSON_ID = "00000000-0000-0000-0000-000000000000"

REALTIME_ENABLED = False
SESSION_DAYS = 7
TIMEZONE = "Europe/Stockholm"
