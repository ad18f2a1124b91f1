import os

COURSE_LENGTH_WEEKS = int(os.getenv("COURSE_LENGTH_WEEKS", "15"))
CHECKIN_CODE_DIGITS = int(os.getenv("CHECKIN_CODE_DIGITS", "4"))

ATTENDANCE_OPEN_MINUTES = int(os.getenv("ATTENDANCE_OPEN_MINUTES", "10"))
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "10"))

LATES_PER_ABSENCE = int(os.getenv("LATES_PER_ABSENCE", "3"))
ABSENT_WARN_COUNT = int(os.getenv("ABSENT_WARN_COUNT", "2"))
ABSENT_DANGER_COUNT = int(os.getenv("ABSENT_DANGER_COUNT", "3"))
DANGER_RATE_BELOW = int(os.getenv("DANGER_RATE_BELOW", "70"))

# CSV with "date,label" rows; a missing file means no holidays
HOLIDAYS_FILE = os.getenv("HOLIDAYS_FILE", "data/holidays.csv")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
