from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local
from ..common.validators import require_role
from ..core.enums import AttendanceMode, NotificationType, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.policy import AttendancePolicy
from ..courses.repository import CourseRepository
from ..courses.scheduler import CodeFactory, random_code_factory
from ..enrollment.repository import EnrollmentRepository
from ..notifications.service import NotificationService
from .model import ClassSession
from .qr import checkin_qr_png
from .repository import SessionRepository

logger = logging.getLogger(__name__)

_STAFF = (Role.INSTRUCTOR, Role.ADMIN)


class SessionService:
    def __init__(
        self,
        sessions: SessionRepository,
        courses: CourseRepository,
        enrollments: EnrollmentRepository,
        attendance: AttendanceService,
        notifications: NotificationService,
        *,
        policy: AttendancePolicy | None = None,
        code_factory: Optional[CodeFactory] = None,
    ):
        self._sessions = sessions
        self._courses = courses
        self._enrollments = enrollments
        self._attendance = attendance
        self._notifications = notifications
        self._policy = policy or AttendancePolicy()
        self._next_code = code_factory or random_code_factory()

    def get_session(self, session_id: int) -> ClassSession:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Session not found")
        return session

    def toggle_open(
        self,
        *,
        current_role: Role,
        session_id: int,
        mode: AttendanceMode | str | None = None,
        now: datetime | None = None,
    ) -> ClassSession:
        require_role(current_role, _STAFF)
        now = now or now_local()
        session = self.get_session(session_id)

        if mode is not None:
            try:
                mode = AttendanceMode(mode)
            except ValueError:
                raise ValidationError(f"Unknown attendance mode: {mode!r}")
        else:
            mode = session.attendance_mode

        if session.is_open:
            return self._close(session, mode=mode)
        if session.is_holiday:
            logger.warning("Refused to open holiday closure %s", session.session_id)
            raise ValidationError("Attendance cannot be opened on a holiday closure")
        return self._open(session, mode=mode, now=now)

    def regenerate_code(self, *, current_role: Role, session_id: int) -> str:
        require_role(current_role, _STAFF)
        session = self.get_session(session_id)
        code = self._next_code()
        self._sessions.set_code(session_id=session.session_id, auth_code=code)
        logger.info("New check-in code for session %s", session.session_id)
        return code

    def clear_code(self, *, current_role: Role, session_id: int) -> None:
        require_role(current_role, _STAFF)
        session = self.get_session(session_id)
        self._sessions.set_code(session_id=session.session_id, auth_code=None)

    def qr_png(self, *, current_role: Role, session_id: int) -> bytes:
        require_role(current_role, _STAFF)
        return checkin_qr_png(self.get_session(session_id))

    def _open(self, session: ClassSession, *, mode: AttendanceMode, now: datetime) -> ClassSession:
        start_time = session.start_time or now.time().replace(microsecond=0)
        open_until = now + timedelta(minutes=self._policy.open_minutes)
        self._sessions.set_open(
            session_id=session.session_id,
            is_open=True,
            start_time=start_time,
            open_until=open_until,
            attendance_mode=mode,
        )
        opened = replace(session, is_open=True, start_time=start_time, open_until=open_until, attendance_mode=mode)

        course = self._courses.get_by_id(session.course_id)
        course_name = course.name if course else f"Course {session.course_id}"
        self._notifications.notify_many(
            user_ids=self._enrollments.list_student_ids(session.course_id),
            type=NotificationType.ATTENDANCE_OPEN,
            title="Attendance is open",
            message=f"{course_name} week {session.week}: check in within {self._policy.open_minutes} minutes",
            course_id=session.course_id,
            session_id=session.session_id,
        )
        logger.info("Opened attendance for session %s until %s", session.session_id, open_until.isoformat())
        return opened

    def _close(self, session: ClassSession, *, mode: AttendanceMode) -> ClassSession:
        before_sessions = self._sessions.list_for_course(session.course_id)
        self._sessions.set_open(
            session_id=session.session_id,
            is_open=False,
            start_time=session.start_time,
            open_until=None,
            attendance_mode=mode,
        )
        closed = replace(session, is_open=False, open_until=None, attendance_mode=mode)
        after_sessions = [closed if s.session_id == session.session_id else s for s in before_sessions]

        notified = self._attendance.notify_risk_changes(
            course_id=session.course_id, before_sessions=before_sessions, after_sessions=after_sessions
        )
        logger.info("Closed attendance for session %s (%d risk notice(s))", session.session_id, notified)
        return closed
