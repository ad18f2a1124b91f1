from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Union

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty, require_positive_int, require_role
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import Semester
from .repository import SemesterRepository

logger = logging.getLogger(__name__)

_ADMIN = (Role.ADMIN,)

DateInput = Union[date, str, None]


def _as_date(value: DateInput) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return parse_iso_date(value)


def _check_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and end < start:
        raise ValidationError("Semester end date is before its start date")


class SemesterService:
    def __init__(self, semesters: SemesterRepository):
        self._semesters = semesters

    def list_semesters(self, *, current_role: Role) -> Sequence[Semester]:
        require_role(current_role, _ADMIN)
        return self._semesters.list_all()

    def get_semester(self, semester_id: int) -> Semester:
        semester = self._semesters.get_by_id(int(semester_id))
        if not semester:
            raise NotFoundError("Semester not found")
        return semester

    def create_semester(
        self,
        *,
        current_role: Role,
        year: int,
        term: int,
        name: str,
        start_date: DateInput = None,
        end_date: DateInput = None,
        is_active: bool = False,
    ) -> int:
        require_role(current_role, _ADMIN)
        year = require_positive_int(year, "Year")
        term = require_positive_int(term, "Term")
        name = require_non_empty(name, "Semester name")
        start, end = _as_date(start_date), _as_date(end_date)
        _check_range(start, end)

        semester_id = self._semesters.create(
            year=year, term=term, name=name, start_date=start, end_date=end, is_active=bool(is_active)
        )
        logger.info("Created semester %s (%s)", semester_id, name)
        return semester_id

    def update_semester(
        self,
        *,
        current_role: Role,
        semester_id: int,
        year: Optional[int] = None,
        term: Optional[int] = None,
        name: Optional[str] = None,
        start_date: DateInput = None,
        end_date: DateInput = None,
        is_active: Optional[bool] = None,
    ) -> Semester:
        require_role(current_role, _ADMIN)
        current = self.get_semester(semester_id)

        updated = Semester(
            semester_id=current.semester_id,
            year=require_positive_int(year, "Year") if year is not None else current.year,
            term=require_positive_int(term, "Term") if term is not None else current.term,
            name=require_non_empty(name, "Semester name") if name is not None else current.name,
            start_date=_as_date(start_date) if start_date is not None else current.start_date,
            end_date=_as_date(end_date) if end_date is not None else current.end_date,
            is_active=bool(is_active) if is_active is not None else current.is_active,
        )
        _check_range(updated.start_date, updated.end_date)

        if not self._semesters.update(
            semester_id=updated.semester_id,
            year=updated.year,
            term=updated.term,
            name=updated.name,
            start_date=updated.start_date,
            end_date=updated.end_date,
            is_active=updated.is_active,
        ):
            raise ValidationError("Failed to update semester")
        return updated

    def delete_semester(self, *, current_role: Role, semester_id: int) -> None:
        require_role(current_role, _ADMIN)
        semester = self.get_semester(semester_id)
        if not self._semesters.delete(semester.semester_id):
            raise ValidationError("Failed to delete semester")
        logger.info("Deleted semester %s", semester.semester_id)
