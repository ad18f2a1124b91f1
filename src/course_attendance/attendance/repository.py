from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceMark


class AttendanceRepository(Protocol):
    """Repository interface for attendance marks.

    Implementations return marks whose status is already an ``AttendanceStatus``
    (see ``AttendanceMark.from_row``).
    """

    def get_for_session_and_student(self, *, session_id: int, student_id: int) -> Optional[AttendanceMark]:
        raise NotImplementedError

    def create_mark(
        self,
        *,
        session_id: int,
        student_id: int,
        status: AttendanceStatus,
        checked_at: Optional[datetime],
    ) -> int:
        raise NotImplementedError

    def update_mark(self, *, mark_id: int, status: AttendanceStatus, checked_at: Optional[datetime]) -> bool:
        raise NotImplementedError

    def list_for_student(self, *, student_id: int, session_ids: Iterable[int]) -> Sequence[AttendanceMark]:
        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[AttendanceMark]:
        raise NotImplementedError
