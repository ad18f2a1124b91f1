from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import AttendanceStatus
from ...sessions.model import ClassSession


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class CheckinStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-in status is decided."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, session: ClassSession) -> StatusDecision:
        raise NotImplementedError
