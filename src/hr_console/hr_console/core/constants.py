"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SECONDS_PER_DAY = 86400

PRESENT_HOURS = 9.0
HALF_DAY_HOURS = 4.5

COVERED_LEAVES_PER_MONTH = 1
CARRY_FORWARD_CREDIT = 2

STANDARD_MONTHLY_HOURS = 198.0
DEFAULT_TAX_PERCENT = 5.0
DEFAULT_PENALTY_PER_ABSENCE = 200.0

DEFAULT_SUMMARY_WRITE_RETRIES = 5
MIN_PASSWORD_LENGTH = 6

ZERO_DURATION = "0h 0m 0s"
