"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SCHOOL_TIMEZONE = "Asia/Jakarta"
DEFAULT_RECONCILE_INTERVAL_MINUTES = 15
DEFAULT_RECONCILE_BUFFER_MINUTES = 1
SETTINGS_ROW_ID = 1
