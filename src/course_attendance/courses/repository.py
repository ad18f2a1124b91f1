from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Course


class CourseRepository(Protocol):
    def create_course(
        self,
        *,
        name: str,
        instructor_id: int,
        department_id: Optional[int] = None,
        semester_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, course_id: int) -> Optional[Course]:
        raise NotImplementedError

    def update_course(
        self,
        *,
        course_id: int,
        name: str,
        instructor_id: int,
        department_id: Optional[int],
        semester_id: Optional[int],
    ) -> bool:
        raise NotImplementedError

    def delete_course(self, course_id: int) -> bool:
        """Delete a course together with its sessions."""

        raise NotImplementedError

    def list_courses(
        self,
        *,
        instructor_id: Optional[int] = None,
        course_ids: Optional[Iterable[int]] = None,
    ) -> Sequence[Course]:
        raise NotImplementedError
