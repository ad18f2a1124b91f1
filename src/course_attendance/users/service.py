from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.validators import optional_text, require_min_length, require_non_empty, require_role
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _parse_role(role) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise ValidationError(f"Unknown role: {role!r}")


class UserService:
    """Use case: manage accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, *, current_role: Role) -> Sequence[User]:
        require_role(current_role, (Role.ADMIN,))
        return self._users.list_all()

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_user(
        self,
        *,
        current_role: Role,
        name: str,
        email: str,
        password: str,
        role: Role | str = Role.STUDENT,
        student_number: Optional[str] = None,
        department_id: Optional[int] = None,
    ) -> int:
        require_role(current_role, (Role.ADMIN,))
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        role = _parse_role(role)
        student_number = optional_text(student_number)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")
        if student_number and self._users.get_by_student_number(student_number):
            raise ValidationError("Student number is already registered")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            student_number=student_number,
            department_id=int(department_id) if department_id is not None else None,
        )
        logger.info("Created %s account %s", role.value, user_id)
        return user_id

    def update_user(
        self,
        *,
        current_role: Role,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        role: Role | str | None = None,
        student_number: Optional[str] = None,
        department_id: Optional[int] = None,
    ) -> User:
        """Change the given fields; ``None`` leaves a field as it is."""

        require_role(current_role, (Role.ADMIN,))
        user = self.get_user(user_id)

        new_email = user.email
        if email is not None:
            new_email = require_non_empty(email, "Email").lower()
            other = self._users.get_by_email(new_email)
            if other and other.user_id != user.user_id:
                raise ValidationError("Email is already registered")

        new_number = user.student_number
        if student_number is not None:
            new_number = optional_text(student_number)
            other = self._users.get_by_student_number(new_number) if new_number else None
            if other and other.user_id != user.user_id:
                raise ValidationError("Student number is already registered")

        updated = User(
            user_id=user.user_id,
            name=require_non_empty(name, "Name") if name is not None else user.name,
            role=_parse_role(role) if role is not None else user.role,
            email=new_email,
            student_number=new_number,
            department_id=int(department_id) if department_id is not None else user.department_id,
            password_hash=user.password_hash,
        )
        if not self._users.update_user(
            user_id=updated.user_id,
            name=updated.name,
            email=updated.email,
            role=updated.role,
            student_number=updated.student_number,
            department_id=updated.department_id,
        ):
            raise ValidationError("Failed to update user")
        logger.info("Updated account %s", updated.user_id)
        return updated

    def delete_user(self, *, current_role: Role, actor_id: int, user_id: int) -> None:
        require_role(current_role, (Role.ADMIN,))
        user = self.get_user(user_id)
        if user.user_id == int(actor_id):
            raise ValidationError("You cannot delete your own account")

        if not self._users.delete_by_id(user.user_id):
            raise ValidationError("Failed to delete user")
        logger.info("Deleted account %s", user.user_id)
