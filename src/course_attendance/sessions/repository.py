from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceMode
from .model import ClassSession, SessionDraft


class SessionRepository(Protocol):
    def bulk_create(self, *, course_id: int, drafts: Sequence[SessionDraft]) -> Sequence[int]:
        """Persist all drafts of a course in one batch.

        Returns the new session ids in draft order.
        """

        raise NotImplementedError

    def get_by_id(self, session_id: int) -> Optional[ClassSession]:
        raise NotImplementedError

    def list_for_course(self, course_id: int) -> Sequence[ClassSession]:
        """Sessions ordered by week."""

        raise NotImplementedError

    def set_open(
        self,
        *,
        session_id: int,
        is_open: bool,
        start_time: Optional[time],
        open_until: Optional[datetime],
        attendance_mode: AttendanceMode,
    ) -> bool:
        raise NotImplementedError

    def set_code(self, *, session_id: int, auth_code: Optional[str]) -> bool:
        raise NotImplementedError

    def count_open(self) -> int:
        raise NotImplementedError
