from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ExcuseStatus
from .model import Excuse


class ExcuseRepository(Protocol):
    def create(self, *, student_id: int, reason: str, file_url: Optional[str]) -> int:
        raise NotImplementedError

    def get_by_id(self, excuse_id: int) -> Optional[Excuse]:
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[Excuse]:
        """Newest first."""

        raise NotImplementedError

    def list_by_status(self, status: ExcuseStatus) -> Sequence[Excuse]:
        """Oldest first."""

        raise NotImplementedError

    def decide(
        self,
        *,
        excuse_id: int,
        status: ExcuseStatus,
        decided_by: int,
        admin_comment: Optional[str],
    ) -> bool:
        """Record the decision. Only pending excuses may change."""

        raise NotImplementedError
