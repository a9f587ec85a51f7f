"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WORKSPACE_ID = "techie"

DEFAULT_RECENT_LIMIT = 5
DEFAULT_REPORT_PERIOD = "monthly"

# Baseline for a "full" day in the daily breakdown (8 hours).
FULL_DAY_MINUTES = 480

QR_VALIDITY_MONTHS = 1
QR_TOKEN_BYTES = 16

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6

SUPERADMIN_USERNAME = "superadmin"
