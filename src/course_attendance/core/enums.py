from __future__ import annotations

from enum import Enum
from typing import Any

from .exceptions import ValidationError


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Normalized attendance status of one student for one session."""

    UNMARKED = "unmarked"
    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    EXCUSED = "excused"

    @classmethod
    def parse(cls, value: Any) -> "AttendanceStatus":
        """Convert a stored status value into the enumeration.

        Stored rows carry numeric codes ("0".."4") as well as words, so the
        conversion happens once when a row leaves persistence.
        """

        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNMARKED

        key = str(value).strip().lower()
        status = _STATUS_ALIASES.get(key)
        if status is None:
            raise ValidationError(f"Unknown attendance status: {value!r}")
        return status

    @property
    def is_decided(self) -> bool:
        return self != AttendanceStatus.UNMARKED


_STATUS_ALIASES = {
    "": AttendanceStatus.UNMARKED,
    "0": AttendanceStatus.UNMARKED,
    "pending": AttendanceStatus.UNMARKED,
    "unmarked": AttendanceStatus.UNMARKED,
    "1": AttendanceStatus.PRESENT,
    "present": AttendanceStatus.PRESENT,
    "2": AttendanceStatus.LATE,
    "late": AttendanceStatus.LATE,
    "3": AttendanceStatus.ABSENT,
    "absent": AttendanceStatus.ABSENT,
    "4": AttendanceStatus.EXCUSED,
    "excuse": AttendanceStatus.EXCUSED,
    "excused": AttendanceStatus.EXCUSED,
}


class AttendanceMode(str, Enum):
    """How students check in: by typing the session code, or by a single click."""

    CODE = "code"
    SIMPLE = "simple"


class RiskLevel(str, Enum):
    OK = "ok"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {RiskLevel.OK: 0, RiskLevel.WARNING: 1, RiskLevel.DANGER: 2}


class ExcuseStatus(str, Enum):
    """Approval flow state of an excuse (leave) request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"
    SUCCESS = "success"
    ATTENDANCE_OPEN = "attendance_open"
    ATTENDANCE_CLOSED = "attendance_closed"
    EXCUSE_RESULT = "excuse_result"
    OFFVOTE_CREATED = "offvote_created"
    OFFVOTE_CLOSED = "offvote_closed"
    MESSAGE = "message"
    NOTICE = "notice"
