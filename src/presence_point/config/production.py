import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

SUPABASE_CONFIG = {
    "url": os.getenv("SUPABASE_URL", ""),
    "key": os.getenv("SUPABASE_KEY", ""),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SCAN_GAP_MS = int(os.getenv("SCAN_GAP_MS", "100"))
SCAN_PLACEHOLDER_LESSON_ID = os.getenv("SCAN_PLACEHOLDER_LESSON_ID", "00000000-0000-0000-0000-000000000000")

REALTIME_ENABLED = bool(int(os.getenv("REALTIME_ENABLED", "1")))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
TIMEZONE = os.getenv("TIMEZONE", "Europe/Stockholm")
