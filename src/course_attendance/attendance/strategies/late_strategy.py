from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...sessions.model import ClassSession
from .base import CheckinStrategy, StatusDecision


class LateStrategy(CheckinStrategy):
    """Late check-in."""

    def decide_checkin(self, *, now: datetime, session: ClassSession) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
