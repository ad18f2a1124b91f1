from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_student_number(self, student_number: str) -> Optional[User]:
        raise NotImplementedError

    def list_by_ids(self, user_ids: Iterable[int]) -> Sequence[User]:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        """Newest accounts first."""

        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        student_number: Optional[str],
        department_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update_user(
        self,
        *,
        user_id: int,
        name: str,
        email: Optional[str],
        role: Role,
        student_number: Optional[str],
        department_id: Optional[int],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
