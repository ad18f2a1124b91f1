from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        """Departments ordered by name."""

        raise NotImplementedError

    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def create(self, *, name: str, code: Optional[str], description: Optional[str], is_active: bool) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        department_id: int,
        name: str,
        code: Optional[str],
        description: Optional[str],
        is_active: bool,
    ) -> bool:
        raise NotImplementedError

    def delete(self, department_id: int) -> bool:
        raise NotImplementedError
