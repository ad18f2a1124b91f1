from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty, require_role
from ..core.enums import ExcuseStatus, NotificationType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..users.repository import UserRepository
from .model import Excuse
from .repository import ExcuseRepository

logger = logging.getLogger(__name__)


class ExcuseService:
    def __init__(
        self,
        excuses: ExcuseRepository,
        users: UserRepository,
        notifications: NotificationService,
        *,
        require_file: bool = False,
    ):
        self._excuses = excuses
        self._users = users
        self._notifications = notifications
        self._require_file = bool(require_file)

    def submit(
        self,
        *,
        current_role: Role,
        student_id: int,
        reason: str,
        file_url: Optional[str] = None,
    ) -> int:
        if current_role != Role.STUDENT:
            raise AuthorizationError("Only students can submit an excuse")

        reason = require_non_empty(reason, "Reason")
        file_url = optional_text(file_url)
        if self._require_file and not file_url:
            raise ValidationError("A supporting document is required")

        excuse_id = self._excuses.create(student_id=int(student_id), reason=reason, file_url=file_url)

        student = self._users.get_by_id(int(student_id))
        student_name = student.name if student else f"#{student_id}"
        self._notifications.notify_many(
            user_ids=[u.user_id for u in self._users.list_by_role(Role.INSTRUCTOR)],
            type=NotificationType.INFO,
            title="New excuse request",
            message=f"{student_name} submitted an excuse request.",
        )
        logger.info("Excuse %s submitted by student %s", excuse_id, student_id)
        return excuse_id

    def list_mine(self, *, current_role: Role, student_id: int) -> Sequence[Excuse]:
        if current_role != Role.STUDENT:
            raise AuthorizationError("Only students have their own excuses")
        return self._excuses.list_for_student(int(student_id))

    def list_pending(self, *, current_role: Role) -> Sequence[Excuse]:
        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        return self._excuses.list_by_status(ExcuseStatus.PENDING)

    def decide(
        self,
        *,
        current_role: Role,
        decided_by: int,
        excuse_id: int,
        status: ExcuseStatus | str,
        comment: str = "",
    ) -> None:
        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        try:
            status = ExcuseStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown excuse status: {status!r}")
        if status == ExcuseStatus.PENDING:
            raise ValidationError("An excuse can only be approved or rejected")

        excuse = self._excuses.get_by_id(int(excuse_id))
        if not excuse:
            raise NotFoundError("Excuse request not found")
        if excuse.status != ExcuseStatus.PENDING:
            raise ValidationError("Excuse request has already been decided")

        comment = optional_text(comment)
        if not self._excuses.decide(
            excuse_id=excuse.excuse_id, status=status, decided_by=int(decided_by), admin_comment=comment
        ):
            raise ValidationError("Failed to record the decision")

        approved = status == ExcuseStatus.APPROVED
        message = "Your excuse request was approved." if approved else "Your excuse request was rejected."
        if comment:
            message = f"{message} ({comment})"
        self._notifications.notify(
            user_id=excuse.student_id,
            type=NotificationType.SUCCESS if approved else NotificationType.DANGER,
            title="Excuse approved" if approved else "Excuse rejected",
            message=message,
        )
        logger.info("Excuse %s %s by user %s", excuse.excuse_id, status.value, decided_by)
