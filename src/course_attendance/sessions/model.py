from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AttendanceMode


@dataclass(frozen=True)
class SessionDraft:
    """A scheduled class meeting before it is persisted (no identifier yet)."""

    week: int
    date: Optional[date]
    title: str
    auth_code: Optional[str] = None
    is_open: bool = False
    attendance_mode: AttendanceMode = AttendanceMode.CODE
    is_makeup: bool = False
    is_holiday: bool = False
    original_week: Optional[int] = None


@dataclass(frozen=True)
class ClassSession:
    """Domain entity: one class meeting of a course.

    ``start_time`` is stamped the first time attendance is opened, so a
    session with a start time has actually been held.
    """

    session_id: int
    course_id: int
    week: int
    date: Optional[date]
    title: str
    is_open: bool = False
    auth_code: Optional[str] = None
    attendance_mode: AttendanceMode = AttendanceMode.CODE
    start_time: Optional[time] = None
    open_until: Optional[datetime] = None
    is_makeup: bool = False
    is_holiday: bool = False

    @property
    def was_held(self) -> bool:
        return self.start_time is not None
