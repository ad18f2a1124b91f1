from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from ..common.validators import require_non_empty, require_positive_int, require_role
from ..core.enums import AttendanceMode, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.policy import SchedulePolicy
from ..enrollment.repository import EnrollmentRepository
from ..holidays.model import HolidayCalendar
from ..sessions.model import ClassSession, SessionDraft
from ..sessions.repository import SessionRepository
from .model import Course
from .repository import CourseRepository
from .scheduler import CodeFactory, generate, random_code_factory

logger = logging.getLogger(__name__)

_STAFF = (Role.INSTRUCTOR, Role.ADMIN)


@dataclass(frozen=True)
class ScheduledCourse:
    course_id: int
    session_ids: Sequence[int]
    drafts: Sequence[SessionDraft]

    @property
    def makeup_count(self) -> int:
        return sum(1 for d in self.drafts if d.is_makeup)

    @property
    def holiday_count(self) -> int:
        return sum(1 for d in self.drafts if d.is_holiday)


class CourseService:
    def __init__(
        self,
        courses: CourseRepository,
        sessions: SessionRepository,
        enrollments: EnrollmentRepository,
        *,
        holidays: HolidayCalendar | None = None,
        policy: SchedulePolicy | None = None,
        code_factory: Optional[CodeFactory] = None,
    ):
        self._courses = courses
        self._sessions = sessions
        self._enrollments = enrollments
        self._holidays = holidays or HolidayCalendar()
        self._policy = policy or SchedulePolicy()
        self._next_code = code_factory or random_code_factory(self._policy.code_digits)

    def create_course(
        self,
        *,
        current_role: Role,
        actor_id: int,
        name: str,
        start_date: date,
        weekday: int,
        department_id: Optional[int] = None,
        semester_id: Optional[int] = None,
        instructor_id: Optional[int] = None,
    ) -> ScheduledCourse:
        """Create a course and its full weekly schedule.

        Instructors always own the courses they create. Admins create
        courses on behalf of an instructor and must name one.
        """

        require_role(current_role, _STAFF)
        name = require_non_empty(name, "Course name")
        if current_role == Role.INSTRUCTOR:
            owner_id = require_positive_int(actor_id, "Instructor")
        else:
            owner_id = require_positive_int(instructor_id, "Instructor")

        # nothing is written unless the whole schedule can be generated
        drafts = generate(
            start_date,
            weekday,
            self._policy.course_length,
            self._holidays,
            code_factory=self._next_code,
        )

        course_id = self._courses.create_course(
            name=name,
            instructor_id=owner_id,
            department_id=department_id,
            semester_id=semester_id,
        )
        session_ids = list(self._sessions.bulk_create(course_id=course_id, drafts=drafts))

        scheduled = ScheduledCourse(course_id=course_id, session_ids=session_ids, drafts=drafts)
        logger.info(
            "Course %s '%s' scheduled: %d sessions (%d holiday, %d makeup)",
            course_id,
            name,
            len(drafts),
            scheduled.holiday_count,
            scheduled.makeup_count,
        )
        return scheduled

    def update_course(
        self,
        *,
        current_role: Role,
        actor_id: int,
        course_id: int,
        name: Optional[str] = None,
        instructor_id: Optional[int] = None,
        department_id: Optional[int] = None,
        semester_id: Optional[int] = None,
    ) -> Course:
        course = self._get_owned(current_role=current_role, actor_id=actor_id, course_id=course_id)

        new_name = require_non_empty(name, "Course name") if name is not None else course.name
        new_instructor = course.instructor_id
        if instructor_id is not None:
            if current_role != Role.ADMIN:
                raise AuthorizationError("Only an admin can reassign a course")
            new_instructor = require_positive_int(instructor_id, "Instructor")

        updated = Course(
            course_id=course.course_id,
            name=new_name,
            instructor_id=new_instructor,
            department_id=department_id if department_id is not None else course.department_id,
            semester_id=semester_id if semester_id is not None else course.semester_id,
        )
        if not self._courses.update_course(
            course_id=updated.course_id,
            name=updated.name,
            instructor_id=updated.instructor_id,
            department_id=updated.department_id,
            semester_id=updated.semester_id,
        ):
            raise ValidationError("Failed to update course")
        return updated

    def delete_course(self, *, current_role: Role, actor_id: int, course_id: int) -> None:
        course = self._get_owned(current_role=current_role, actor_id=actor_id, course_id=course_id)
        if not self._courses.delete_course(course.course_id):
            raise ValidationError("Failed to delete course")
        logger.info("Course %s deleted", course.course_id)

    def get_course(self, course_id: int) -> Course:
        course = self._courses.get_by_id(int(course_id))
        if not course:
            raise NotFoundError("Course not found")
        return course

    def list_courses(self, *, current_role: Role, user_id: int) -> Sequence[Course]:
        if current_role == Role.ADMIN:
            return self._courses.list_courses()
        if current_role == Role.INSTRUCTOR:
            return self._courses.list_courses(instructor_id=int(user_id))
        course_ids = list(self._enrollments.list_course_ids(int(user_id)))
        if not course_ids:
            return []
        return self._courses.list_courses(course_ids=course_ids)

    def list_sessions(self, course_id: int) -> Sequence[ClassSession]:
        return self._sessions.list_for_course(self.get_course(course_id).course_id)

    def add_session(
        self,
        *,
        current_role: Role,
        actor_id: int,
        course_id: int,
        week: int,
        session_date: Optional[date] = None,
        title: Optional[str] = None,
        mode: AttendanceMode | str = AttendanceMode.CODE,
    ) -> int:
        """Add one extra session outside the generated schedule."""

        course = self._get_owned(current_role=current_role, actor_id=actor_id, course_id=course_id)
        week = require_positive_int(week, "Week")
        try:
            mode = AttendanceMode(mode)
        except ValueError:
            raise ValidationError(f"Unknown attendance mode: {mode!r}")

        draft = SessionDraft(
            week=week,
            date=session_date,
            title=(title or "").strip() or f"Week {week} class",
            auth_code=self._next_code() if mode == AttendanceMode.CODE else None,
            attendance_mode=mode,
        )
        session_ids: List[int] = list(self._sessions.bulk_create(course_id=course.course_id, drafts=[draft]))
        logger.info("Added session week %s to course %s", week, course.course_id)
        return session_ids[0]

    def _get_owned(self, *, current_role: Role, actor_id: int, course_id: int) -> Course:
        require_role(current_role, _STAFF)
        course = self.get_course(course_id)
        if current_role == Role.INSTRUCTOR and course.instructor_id != int(actor_id):
            raise AuthorizationError("You can only manage your own courses")
        return course
