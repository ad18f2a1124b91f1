from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.enums import AttendanceStatus, RiskLevel


@dataclass(frozen=True)
class AttendanceMark:
    """Domain entity: one student's attendance status for one session."""

    mark_id: int
    session_id: int
    student_id: int
    status: AttendanceStatus
    checked_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AttendanceMark":
        """Build a mark from a persistence row, normalizing the stored status."""

        return cls(
            mark_id=int(row["mark_id"]),
            session_id=int(row["session_id"]),
            student_id=int(row["student_id"]),
            status=AttendanceStatus.parse(row.get("status")),
            checked_at=row.get("checked_at"),
        )


@dataclass(frozen=True)
class AttendanceSummary:
    total_sessions: int
    present_count: int
    late_count: int
    recorded_absent_count: int
    excused_count: int
    unmarked_count: int
    auto_absent_count: int
    late_conversion: int
    remaining_lates: int
    final_absent_count: int
    attendance_rate: int
    risk_level: RiskLevel

    @property
    def pure_absent_count(self) -> int:
        """Absences that were not produced by late conversion."""
        return self.recorded_absent_count + self.auto_absent_count

    def to_dict(self) -> dict:
        return {
            "total_sessions": self.total_sessions,
            "present_count": self.present_count,
            "late_count": self.late_count,
            "recorded_absent_count": self.recorded_absent_count,
            "excused_count": self.excused_count,
            "unmarked_count": self.unmarked_count,
            "auto_absent_count": self.auto_absent_count,
            "late_conversion": self.late_conversion,
            "remaining_lates": self.remaining_lates,
            "pure_absent_count": self.pure_absent_count,
            "final_absent_count": self.final_absent_count,
            "attendance_rate": self.attendance_rate,
            "risk_level": self.risk_level.value,
        }
