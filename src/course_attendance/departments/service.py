from __future__ import annotations

import logging
from typing import List, Optional

from ..common.validators import optional_text, require_non_empty, require_role
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from .model import Department, DepartmentListing
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)

_ADMIN = (Role.ADMIN,)


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, courses: CourseRepository):
        self._departments = departments
        self._courses = courses

    def list_departments(self, *, current_role: Role) -> List[DepartmentListing]:
        require_role(current_role, _ADMIN)
        by_department: dict[int, list[str]] = {}
        for course in self._courses.list_courses():
            if course.department_id is not None:
                by_department.setdefault(course.department_id, []).append(course.name)

        return [
            DepartmentListing(department=d, course_names=tuple(by_department.get(d.department_id, ())))
            for d in self._departments.list_all()
        ]

    def get_department(self, department_id: int) -> Department:
        department = self._departments.get_by_id(int(department_id))
        if not department:
            raise NotFoundError("Department not found")
        return department

    def create_department(
        self,
        *,
        current_role: Role,
        name: str,
        code: Optional[str] = None,
        description: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        require_role(current_role, _ADMIN)
        name = require_non_empty(name, "Department name")
        department_id = self._departments.create(
            name=name,
            code=optional_text(code),
            description=optional_text(description),
            is_active=bool(is_active),
        )
        logger.info("Created department %s (%s)", department_id, name)
        return department_id

    def update_department(
        self,
        *,
        current_role: Role,
        department_id: int,
        name: Optional[str] = None,
        code: Optional[str] = None,
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Department:
        require_role(current_role, _ADMIN)
        current = self.get_department(department_id)

        updated = Department(
            department_id=current.department_id,
            name=require_non_empty(name, "Department name") if name is not None else current.name,
            code=optional_text(code) if code is not None else current.code,
            description=optional_text(description) if description is not None else current.description,
            is_active=bool(is_active) if is_active is not None else current.is_active,
        )
        if not self._departments.update(
            department_id=updated.department_id,
            name=updated.name,
            code=updated.code,
            description=updated.description,
            is_active=updated.is_active,
        ):
            raise ValidationError("Failed to update department")
        return updated

    def delete_department(self, *, current_role: Role, department_id: int) -> None:
        """Delete a department that no course refers to."""

        require_role(current_role, _ADMIN)
        department = self.get_department(department_id)
        if any(c.department_id == department.department_id for c in self._courses.list_courses()):
            logger.warning("Refused to delete department %s with linked courses", department.department_id)
            raise ValidationError("Department still has courses and cannot be deleted")

        if not self._departments.delete(department.department_id):
            raise ValidationError("Failed to delete department")
        logger.info("Deleted department %s", department.department_id)
