from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_ABSENT_DANGER_COUNT,
    DEFAULT_ABSENT_WARN_COUNT,
    DEFAULT_CODE_DIGITS,
    DEFAULT_COURSE_LENGTH,
    DEFAULT_DANGER_RATE_BELOW,
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_LATES_PER_ABSENCE,
    DEFAULT_OPEN_MINUTES,
)


@dataclass(frozen=True)
class AttendancePolicy:
    """Thresholds used when summarizing attendance and checking students in."""

    lates_per_absence: int = DEFAULT_LATES_PER_ABSENCE
    warn_absences: int = DEFAULT_ABSENT_WARN_COUNT
    danger_absences: int = DEFAULT_ABSENT_DANGER_COUNT
    danger_rate_below: int = DEFAULT_DANGER_RATE_BELOW
    open_minutes: int = DEFAULT_OPEN_MINUTES
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES


@dataclass(frozen=True)
class SchedulePolicy:
    course_length: int = DEFAULT_COURSE_LENGTH
    code_digits: int = DEFAULT_CODE_DIGITS
