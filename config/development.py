import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

DEBUG = True

# "mysql" or "memory"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

# Apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo classes and students on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

SCHOOL_TIMEZONE = os.getenv("SCHOOL_TIMEZONE", "Asia/Jakarta")

RECONCILER_ENABLED = bool(int(os.getenv("RECONCILER_ENABLED", "1")))
RECONCILE_INTERVAL_MINUTES = int(os.getenv("RECONCILE_INTERVAL_MINUTES", "15"))
RECONCILE_BUFFER_MINUTES = int(os.getenv("RECONCILE_BUFFER_MINUTES", "1"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))
