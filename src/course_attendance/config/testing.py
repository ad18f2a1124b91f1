COURSE_LENGTH_WEEKS = 15
CHECKIN_CODE_DIGITS = 4

ATTENDANCE_OPEN_MINUTES = 10
LATE_GRACE_MINUTES = 10

LATES_PER_ABSENCE = 3
ABSENT_WARN_COUNT = 2
ABSENT_DANGER_COUNT = 3
DANGER_RATE_BELOW = 70

HOLIDAYS_FILE = None

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
