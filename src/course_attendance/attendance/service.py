from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_role
from ..core.enums import AttendanceMode, AttendanceStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.policy import AttendancePolicy
from ..courses.repository import CourseRepository
from ..enrollment.repository import EnrollmentRepository
from ..notifications.service import NotificationService
from ..sessions.model import ClassSession
from ..sessions.qr import parse_checkin_payload
from ..sessions.repository import SessionRepository
from ..users.repository import UserRepository
from .aggregator import summarize
from .factory import CheckinStrategyFactory
from .model import AttendanceMark, AttendanceSummary
from .repository import AttendanceRepository
from .risk import escalated, risk_notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentReportRow:
    student_id: int
    name: str
    student_number: Optional[str]
    summary: AttendanceSummary

    def to_dict(self) -> dict:
        data = {"student_id": self.student_id, "name": self.name, "student_number": self.student_number}
        data.update(self.summary.to_dict())
        return data


@dataclass(frozen=True)
class WeeklyStatusRow:
    session_id: int
    week: int
    title: str
    date: Optional[date]
    status: str
    label: str
    css_class: str


@dataclass(frozen=True)
class RosterEntry:
    student_id: int
    name: str
    student_number: Optional[str]
    mark_id: Optional[int]
    status: AttendanceStatus


_WEEKLY_LABELS = {
    "present": ("Present", "bg-success"),
    "late": ("Late", "bg-warning text-dark"),
    "absent": ("Absent", "bg-danger"),
    "excused": ("Excused", "bg-info"),
    "holiday": ("No class", "bg-light text-dark"),
    "in_progress": ("In progress", "bg-primary"),
    "auto_absent": ("Absent (missed)", "bg-danger"),
    "undecided": ("Undecided", "bg-secondary"),
}


class AttendanceService:
    def __init__(
        self,
        marks: AttendanceRepository,
        sessions: SessionRepository,
        courses: CourseRepository,
        enrollments: EnrollmentRepository,
        users: UserRepository,
        notifications: NotificationService,
        *,
        policy: AttendancePolicy | None = None,
        strategy_factory: CheckinStrategyFactory | None = None,
    ):
        self._marks = marks
        self._sessions = sessions
        self._courses = courses
        self._enrollments = enrollments
        self._users = users
        self._notifications = notifications
        self._policy = policy or AttendancePolicy()
        self._factory = strategy_factory or CheckinStrategyFactory(grace_minutes=self._policy.late_grace_minutes)

    @property
    def policy(self) -> AttendancePolicy:
        return self._policy

    def check_in(
        self,
        student_id: int,
        session_id: int,
        code: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceMark:
        now = now or now_local()
        session = self._get_session(session_id)

        if not session.is_open:
            raise ValidationError("Attendance is not open for this session")
        if session.open_until is not None and now > session.open_until:
            raise ValidationError("The attendance window has closed")
        if session.attendance_mode == AttendanceMode.CODE:
            submitted = str(code).strip() if code is not None else ""
            if not submitted:
                raise ValidationError("Check-in code is required")
            if not session.auth_code or submitted != session.auth_code:
                logger.warning("Rejected check-in for session %s: wrong code", session.session_id)
                raise ValidationError("Check-in code does not match")

        existing = self._marks.get_for_session_and_student(session_id=session.session_id, student_id=int(student_id))
        if existing and existing.status.is_decided:
            raise ValidationError("You have already checked in for this session")

        strategy = self._factory.for_checkin(now=now, session=session)
        decision = strategy.decide_checkin(now=now, session=session)

        course_sessions = self._sessions.list_for_course(session.course_id)
        before = self._summarize(int(student_id), course_sessions)
        mark = self._write_mark(existing, session=session, student_id=int(student_id), status=decision.status, now=now)
        self._notify_on_escalation(int(student_id), session.course_id, before, course_sessions)

        logger.info(
            "Student %s checked in to session %s as %s", student_id, session.session_id, decision.status.value
        )
        return mark

    def check_in_with_payload(self, student_id: int, payload: str, *, now: datetime | None = None) -> AttendanceMark:
        """Check in from the text of a scanned session QR code."""

        parsed = parse_checkin_payload(payload)
        return self.check_in(student_id, parsed.session_id, parsed.code, now=now)

    def correct_status(
        self,
        *,
        current_role: Role,
        session_id: int,
        student_id: int,
        status,
        now: datetime | None = None,
    ) -> AttendanceMark:
        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        new_status = AttendanceStatus.parse(status)
        now = now or now_local()
        session = self._get_session(session_id)

        existing = self._marks.get_for_session_and_student(session_id=session.session_id, student_id=int(student_id))
        course_sessions = self._sessions.list_for_course(session.course_id)
        before = self._summarize(int(student_id), course_sessions)
        mark = self._write_mark(existing, session=session, student_id=int(student_id), status=new_status, now=now)
        self._notify_on_escalation(int(student_id), session.course_id, before, course_sessions)

        logger.info("Session %s student %s set to %s", session.session_id, student_id, new_status.value)
        return mark

    def summarize_student(self, *, student_id: int, course_id: int) -> AttendanceSummary:
        sessions = self._sessions.list_for_course(int(course_id))
        return self._summarize(int(student_id), sessions)

    def course_report(self, course_id: int) -> List[StudentReportRow]:
        """One row per enrolled student, lowest attendance rate first."""

        sessions = self._sessions.list_for_course(int(course_id))
        student_ids = list(self._enrollments.list_student_ids(int(course_id)))
        users = {u.user_id: u for u in self._users.list_by_ids(student_ids)}

        rows = []
        for student_id in student_ids:
            user = users.get(student_id)
            rows.append(
                StudentReportRow(
                    student_id=student_id,
                    name=user.name if user else f"#{student_id}",
                    student_number=user.student_number if user else None,
                    summary=self._summarize(student_id, sessions),
                )
            )
        rows.sort(key=lambda r: r.summary.attendance_rate)
        return rows

    def weekly_status(self, *, student_id: int, course_id: int) -> List[WeeklyStatusRow]:
        sessions = self._sessions.list_for_course(int(course_id))
        marks = self._marks.list_for_student(student_id=int(student_id), session_ids=[s.session_id for s in sessions])
        by_session = {m.session_id: m for m in marks}

        rows = []
        for s in sessions:
            mark = by_session.get(s.session_id)
            if s.is_holiday:
                key = "holiday"
            elif mark and mark.status.is_decided:
                key = mark.status.value
            elif s.is_open:
                key = "in_progress"
            elif s.was_held:
                key = "auto_absent"
            else:
                key = "undecided"
            label, css = _WEEKLY_LABELS[key]
            rows.append(
                WeeklyStatusRow(
                    session_id=s.session_id,
                    week=s.week,
                    title=s.title,
                    date=s.date,
                    status=key,
                    label=label,
                    css_class=css,
                )
            )
        return rows

    def session_roster(self, session_id: int) -> List[RosterEntry]:
        session = self._get_session(session_id)
        student_ids = list(self._enrollments.list_student_ids(session.course_id))
        users = {u.user_id: u for u in self._users.list_by_ids(student_ids)}
        marks = {m.student_id: m for m in self._marks.list_for_session(session.session_id)}

        entries = []
        for student_id in student_ids:
            user = users.get(student_id)
            mark = marks.get(student_id)
            if mark and mark.status.is_decided:
                status = mark.status
            elif not session.is_open and session.was_held:
                status = AttendanceStatus.ABSENT
            else:
                status = AttendanceStatus.UNMARKED
            entries.append(
                RosterEntry(
                    student_id=student_id,
                    name=user.name if user else f"#{student_id}",
                    student_number=user.student_number if user else None,
                    mark_id=mark.mark_id if mark else None,
                    status=status,
                )
            )
        entries.sort(key=lambda e: (e.student_number or "", e.student_id))
        return entries

    def notify_risk_changes(
        self,
        *,
        course_id: int,
        before_sessions: Sequence[ClassSession],
        after_sessions: Sequence[ClassSession],
    ) -> int:
        """Notify enrolled students whose risk rose between two session states.

        Used when a session is closed, which can turn missing marks into
        automatic absences. Returns the number of students notified.
        """

        notified = 0
        for student_id in self._enrollments.list_student_ids(int(course_id)):
            before = self._summarize(student_id, before_sessions)
            if self._notify_on_escalation(student_id, int(course_id), before, after_sessions):
                notified += 1
        return notified

    def _summarize(self, student_id: int, sessions: Sequence[ClassSession]) -> AttendanceSummary:
        marks = self._marks.list_for_student(student_id=student_id, session_ids=[s.session_id for s in sessions])
        return summarize(sessions, marks, self._policy)

    def _notify_on_escalation(
        self,
        student_id: int,
        course_id: int,
        before: AttendanceSummary,
        sessions: Sequence[ClassSession],
    ) -> bool:
        after = self._summarize(student_id, sessions)
        if not escalated(before, after):
            return False

        course = self._courses.get_by_id(course_id)
        kind, title, message = risk_notification(after, course_name=course.name if course else f"Course {course_id}")
        self._notifications.notify(user_id=student_id, type=kind, title=title, message=message, course_id=course_id)
        logger.info("Student %s reached %s in course %s", student_id, after.risk_level.value, course_id)
        return True

    def _write_mark(
        self,
        existing: Optional[AttendanceMark],
        *,
        session: ClassSession,
        student_id: int,
        status: AttendanceStatus,
        now: datetime,
    ) -> AttendanceMark:
        if existing:
            self._marks.update_mark(mark_id=existing.mark_id, status=status, checked_at=now)
            mark_id = existing.mark_id
        else:
            mark_id = self._marks.create_mark(
                session_id=session.session_id, student_id=student_id, status=status, checked_at=now
            )
        return AttendanceMark(
            mark_id=mark_id, session_id=session.session_id, student_id=student_id, status=status, checked_at=now
        )

    def _get_session(self, session_id: int) -> ClassSession:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Session not found")
        return session
