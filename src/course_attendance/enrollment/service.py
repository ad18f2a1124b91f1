from __future__ import annotations

import logging
from typing import List, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_non_empty, require_role
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..sessions.repository import SessionRepository
from ..users.model import User
from ..users.repository import UserRepository
from .repository import EnrollmentRepository

logger = logging.getLogger(__name__)


class EnrollmentService:
    def __init__(
        self,
        enrollments: EnrollmentRepository,
        courses: CourseRepository,
        sessions: SessionRepository,
        marks: AttendanceRepository,
        users: UserRepository,
    ):
        self._enrollments = enrollments
        self._courses = courses
        self._sessions = sessions
        self._marks = marks
        self._users = users

    def enroll(self, *, current_role: Role, course_id: int, student_number: str) -> int:
        """Enroll a student by student number and seed an unmarked mark per session."""

        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        student_number = require_non_empty(student_number, "Student number")

        course = self._courses.get_by_id(int(course_id))
        if not course:
            raise NotFoundError("Course not found")
        student = self._users.get_by_student_number(student_number)
        if not student or student.role != Role.STUDENT:
            raise NotFoundError("Student not found")
        if self._enrollments.exists(course_id=course.course_id, student_id=student.user_id):
            raise ValidationError("Student is already enrolled in this course")

        enrollment_id = self._enrollments.create(course_id=course.course_id, student_id=student.user_id)

        seeded = 0
        for session in self._sessions.list_for_course(course.course_id):
            existing = self._marks.get_for_session_and_student(
                session_id=session.session_id, student_id=student.user_id
            )
            if existing:
                continue
            self._marks.create_mark(
                session_id=session.session_id,
                student_id=student.user_id,
                status=AttendanceStatus.UNMARKED,
                checked_at=None,
            )
            seeded += 1

        logger.info(
            "Enrolled student %s in course %s (%d mark(s) seeded)", student.user_id, course.course_id, seeded
        )
        return enrollment_id

    def unenroll(self, *, current_role: Role, course_id: int, student_id: int) -> None:
        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        if not self._enrollments.delete(course_id=int(course_id), student_id=int(student_id)):
            raise NotFoundError("Enrollment not found")

    def list_students(self, course_id: int) -> Sequence[User]:
        student_ids = list(self._enrollments.list_student_ids(int(course_id)))
        users = {u.user_id: u for u in self._users.list_by_ids(student_ids)}
        result: List[User] = [users[sid] for sid in student_ids if sid in users]
        result.sort(key=lambda u: (u.student_number or "", u.user_id))
        return result

    def list_candidates(self, *, current_role: Role) -> Sequence[User]:
        """Every student account, by name, for the enrollment picker."""

        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        students = list(self._users.list_by_role(Role.STUDENT))
        students.sort(key=lambda u: (u.name, u.user_id))
        return students
