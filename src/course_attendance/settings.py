from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .config import get_settings_module
from .core.policy import AttendancePolicy, SchedulePolicy


@dataclass(frozen=True)
class AppSettings:
    settings_module: str
    attendance: AttendancePolicy = field(default_factory=AttendancePolicy)
    schedule: SchedulePolicy = field(default_factory=SchedulePolicy)
    holidays_file: Optional[str] = None
    log_level: str = "INFO"
    debug: bool = False


def load_settings(settings_module: Optional[str] = None) -> AppSettings:
    """Load .env, import the environment's settings module and build policies."""

    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    attendance = AttendancePolicy(
        lates_per_absence=int(getattr(settings, "LATES_PER_ABSENCE", 3)),
        warn_absences=int(getattr(settings, "ABSENT_WARN_COUNT", 2)),
        danger_absences=int(getattr(settings, "ABSENT_DANGER_COUNT", 3)),
        danger_rate_below=int(getattr(settings, "DANGER_RATE_BELOW", 70)),
        open_minutes=int(getattr(settings, "ATTENDANCE_OPEN_MINUTES", 10)),
        late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", 10)),
    )
    schedule = SchedulePolicy(
        course_length=int(getattr(settings, "COURSE_LENGTH_WEEKS", 15)),
        code_digits=int(getattr(settings, "CHECKIN_CODE_DIGITS", 4)),
    )

    return AppSettings(
        settings_module=settings_module,
        attendance=attendance,
        schedule=schedule,
        holidays_file=getattr(settings, "HOLIDAYS_FILE", None),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        debug=bool(getattr(settings, "DEBUG", False)),
    )
