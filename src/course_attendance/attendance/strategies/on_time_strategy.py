from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...sessions.model import ClassSession
from .base import CheckinStrategy, StatusDecision


class OnTimeStrategy(CheckinStrategy):
    """Check-in within the grace period."""

    def decide_checkin(self, *, now: datetime, session: ClassSession) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
