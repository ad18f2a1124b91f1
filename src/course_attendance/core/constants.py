"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_COURSE_LENGTH = 15
DEFAULT_CODE_DIGITS = 4
DEFAULT_OPEN_MINUTES = 10
DEFAULT_LATE_GRACE_MINUTES = 10

DEFAULT_LATES_PER_ABSENCE = 3
DEFAULT_ABSENT_WARN_COUNT = 2
DEFAULT_ABSENT_DANGER_COUNT = 3
DEFAULT_DANGER_RATE_BELOW = 70

DAYS_PER_WEEK = 7
MESSAGE_PREVIEW_LENGTH = 20
DEFAULT_LIST_LIMIT = 200
MIN_PASSWORD_LENGTH = 6
