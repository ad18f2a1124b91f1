from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import minutes_after
from ..sessions.model import ClassSession
from .strategies.base import CheckinStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class CheckinStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the session start time."""

    grace_minutes: int = 10

    def for_checkin(self, *, now: datetime, session: ClassSession) -> CheckinStrategy:
        if session.start_time is None:
            return OnTimeStrategy()

        if minutes_after(session.start_time, now) > self.grace_minutes:
            return LateStrategy()
        return OnTimeStrategy()
