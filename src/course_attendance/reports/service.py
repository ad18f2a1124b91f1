from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..attendance.service import AttendanceService
from ..common.validators import require_role
from ..core.enums import RiskLevel, Role
from ..courses.model import Course
from ..courses.repository import CourseRepository
from ..sessions.repository import SessionRepository


@dataclass(frozen=True)
class AdminOverview:
    total_courses: int
    open_sessions: int
    warning_pairs: int
    danger_pairs: int


@dataclass(frozen=True)
class CourseRiskRow:
    course_id: int
    course_name: str
    enrolled: int
    warning: int
    danger: int
    average_rate: int


class AdminReportService:
    def __init__(
        self,
        courses: CourseRepository,
        sessions: SessionRepository,
        attendance: AttendanceService,
    ):
        self._courses = courses
        self._sessions = sessions
        self._attendance = attendance

    def overview(self, *, current_role: Role, courses: Optional[Iterable[Course]] = None) -> AdminOverview:
        """Dashboard counters; warning pairs include those already at danger."""

        require_role(current_role, (Role.ADMIN,))
        course_list = list(courses) if courses is not None else list(self._courses.list_courses())

        warning = 0
        danger = 0
        for course in course_list:
            for row in self._attendance.course_report(course.course_id):
                level = row.summary.risk_level
                if level.rank >= RiskLevel.WARNING.rank:
                    warning += 1
                if level == RiskLevel.DANGER:
                    danger += 1

        return AdminOverview(
            total_courses=len(course_list),
            open_sessions=self._sessions.count_open(),
            warning_pairs=warning,
            danger_pairs=danger,
        )

    def course_risk_table(self, *, current_role: Role) -> list[CourseRiskRow]:
        require_role(current_role, (Role.ADMIN,))

        out: list[CourseRiskRow] = []
        for course in self._courses.list_courses():
            rows = self._attendance.course_report(course.course_id)
            rates = [r.summary.attendance_rate for r in rows]
            out.append(
                CourseRiskRow(
                    course_id=course.course_id,
                    course_name=course.name,
                    enrolled=len(rows),
                    warning=sum(1 for r in rows if r.summary.risk_level == RiskLevel.WARNING),
                    danger=sum(1 for r in rows if r.summary.risk_level == RiskLevel.DANGER),
                    average_rate=(2 * sum(rates) + len(rates)) // (2 * len(rates)) if rates else 0,
                )
            )
        out.sort(key=lambda r: (-r.danger, -r.warning, r.course_name))
        return out
