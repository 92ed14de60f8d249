import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance_test"),
}

DEBUG = False
TESTING = True

STORAGE_BACKEND = "memory"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

SCHOOL_TIMEZONE = "Asia/Jakarta"

# Tests drive sweeps by hand.
RECONCILER_ENABLED = False
RECONCILE_INTERVAL_MINUTES = 15
RECONCILE_BUFFER_MINUTES = 1

LOG_LEVEL = "WARNING"
LOG_JSON = False
