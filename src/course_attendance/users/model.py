from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: ``password_hash`` holds a werkzeug hash and is left out of ``repr``.
    """

    user_id: int
    name: str
    role: Role
    email: Optional[str] = None
    student_number: Optional[str] = None
    department_id: Optional[int] = None
    password_hash: Optional[str] = field(default=None, repr=False)
