from __future__ import annotations

from typing import Protocol, Sequence


class EnrollmentRepository(Protocol):
    def exists(self, *, course_id: int, student_id: int) -> bool:
        raise NotImplementedError

    def create(self, *, course_id: int, student_id: int) -> int:
        raise NotImplementedError

    def delete(self, *, course_id: int, student_id: int) -> bool:
        raise NotImplementedError

    def list_student_ids(self, course_id: int) -> Sequence[int]:
        raise NotImplementedError

    def list_course_ids(self, student_id: int) -> Sequence[int]:
        raise NotImplementedError
