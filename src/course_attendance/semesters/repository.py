from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Semester


class SemesterRepository(Protocol):
    def list_all(self) -> Sequence[Semester]:
        """Newest first: year, then term, descending."""

        raise NotImplementedError

    def get_by_id(self, semester_id: int) -> Optional[Semester]:
        raise NotImplementedError

    def create(
        self,
        *,
        year: int,
        term: int,
        name: str,
        start_date: Optional[date],
        end_date: Optional[date],
        is_active: bool,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        semester_id: int,
        year: int,
        term: int,
        name: str,
        start_date: Optional[date],
        end_date: Optional[date],
        is_active: bool,
    ) -> bool:
        raise NotImplementedError

    def delete(self, semester_id: int) -> bool:
        raise NotImplementedError
