"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_RECORDS_LIMIT = 50
MAX_RECORDS_LIMIT = 500

PIN_MIN_LENGTH = 4
PIN_MAX_LENGTH = 6

ADMIN_CORRECTION_REASON = "Admin correction"
ADMIN_INSERT_REASON = "Missing punch added by admin"

PIN_IN_USE_MESSAGE = "This PIN is already in use. Please choose a different PIN."

# Longest pay-period report, in days (inclusive).
MAX_REPORT_DAYS = 366

OPEN_PUNCH_CONFLICT_MESSAGE = "Employee already has an open time record"
