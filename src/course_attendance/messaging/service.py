from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import MESSAGE_PREVIEW_LENGTH
from ..core.enums import NotificationType, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..enrollment.repository import EnrollmentRepository
from ..notifications.service import NotificationService
from ..users.model import User
from ..users.repository import UserRepository
from .model import Message
from .repository import MessageRepository

logger = logging.getLogger(__name__)


def preview(content: str, length: int = MESSAGE_PREVIEW_LENGTH) -> str:
    return content if len(content) <= length else content[:length] + "..."


class MessageService:
    def __init__(
        self,
        messages: MessageRepository,
        courses: CourseRepository,
        enrollments: EnrollmentRepository,
        users: UserRepository,
        notifications: NotificationService,
    ):
        self._messages = messages
        self._courses = courses
        self._enrollments = enrollments
        self._users = users
        self._notifications = notifications

    def targets(self, *, current_role: Role, user_id: int, course_id: int) -> Sequence[User]:
        """Who the user may write to within a course."""

        course = self._courses.get_by_id(int(course_id))
        if not course:
            raise NotFoundError("Course not found")

        if current_role == Role.STUDENT:
            instructor = self._users.get_by_id(course.instructor_id)
            return [instructor] if instructor else []

        seen = set()
        result: List[User] = []
        student_ids = list(self._enrollments.list_student_ids(course.course_id))
        for user in self._users.list_by_ids(student_ids):
            if user.user_id in seen or user.user_id == int(user_id):
                continue
            seen.add(user.user_id)
            result.append(user)
        return result

    def conversation(self, *, user_id: int, other_id: int, course_id: Optional[int] = None) -> Sequence[Message]:
        return self._messages.list_conversation(
            user_id=int(user_id),
            other_id=int(other_id),
            course_id=int(course_id) if course_id is not None else None,
        )

    def send(self, *, sender_id: int, receiver_id: int, content: str, course_id: Optional[int] = None) -> int:
        content = require_non_empty(content, "Message")
        if int(sender_id) == int(receiver_id):
            raise ValidationError("You cannot message yourself")

        receiver = self._users.get_by_id(int(receiver_id))
        if not receiver:
            raise NotFoundError("Recipient not found")

        message_id = self._messages.create(
            sender_id=int(sender_id),
            receiver_id=receiver.user_id,
            course_id=int(course_id) if course_id is not None else None,
            content=content,
        )

        sender = self._users.get_by_id(int(sender_id))
        sender_name = sender.name if sender else f"#{sender_id}"
        self._notifications.notify(
            user_id=receiver.user_id,
            type=NotificationType.MESSAGE,
            title="New message",
            message=f"{sender_name}: {preview(content)}",
            course_id=int(course_id) if course_id is not None else None,
        )
        logger.info("Message %s sent from %s to %s", message_id, sender_id, receiver.user_id)
        return message_id
