from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Course:
    """Domain entity: a course owned by one instructor."""

    course_id: int
    name: str
    instructor_id: int
    department_id: Optional[int] = None
    semester_id: Optional[int] = None
