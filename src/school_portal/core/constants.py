"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MAKE_UP_PREFIX = "Make up: "
MAKE_UP_MARKER = "Make up"

DEFAULT_START_SESSION = 1

GRADE_GOOD_MIN_PERCENT = 90
GRADE_WARNING_MIN_PERCENT = 70

DEFAULT_INSURANCE_EXPIRING_DAYS = 30

CENTS = Decimal("0.01")

MYSQL_DUPLICATE_KEY_ERRNO = 1062
