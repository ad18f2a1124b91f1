from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Department:
    department_id: int
    name: str
    code: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class DepartmentListing:
    """A department with the names of the courses filed under it."""

    department: Department
    course_names: tuple[str, ...] = ()
