from __future__ import annotations

from typing import Optional

from ..core.enums import NotificationType, RiskLevel
from .model import AttendanceSummary


def escalated(before: Optional[AttendanceSummary], after: AttendanceSummary) -> bool:
    """True when a change moved the student into a higher warning/danger level."""

    if after.risk_level == RiskLevel.OK:
        return False
    previous = before.risk_level if before is not None else RiskLevel.OK
    return after.risk_level.rank > previous.rank


def risk_notification(summary: AttendanceSummary, *, course_name: str) -> tuple:
    """Return (type, title, message) for a risk notice."""

    if summary.risk_level == RiskLevel.DANGER:
        kind = NotificationType.DANGER
        title = "Attendance danger"
    else:
        kind = NotificationType.WARNING
        title = "Attendance warning"
    message = (
        f"{course_name}: {summary.final_absent_count} absence(s) counted, "
        f"attendance rate {summary.attendance_rate}%"
    )
    return kind, title, message
