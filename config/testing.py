import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker_test"),
}
DB_POOL_SIZE = 2
DB_POOL_TIMEOUT = 1.0

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

LOCAL_UTC_OFFSET_HOURS = 3
LATE_CUTOFF = "08:30"

SESSION_HOURS = 24
SESSION_COOKIE_SECURE = False

AUTO_INIT_DB = False
AUTO_SEED_DB = False
