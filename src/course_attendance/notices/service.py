from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty, require_role
from ..core.enums import NotificationType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..enrollment.repository import EnrollmentRepository
from ..notifications.service import NotificationService
from ..users.repository import UserRepository
from .model import Notice
from .repository import NoticeRepository

logger = logging.getLogger(__name__)


class NoticeService:
    def __init__(
        self,
        notices: NoticeRepository,
        courses: CourseRepository,
        enrollments: EnrollmentRepository,
        users: UserRepository,
        notifications: NotificationService,
    ):
        self._notices = notices
        self._courses = courses
        self._enrollments = enrollments
        self._users = users
        self._notifications = notifications

    def post(
        self,
        *,
        current_role: Role,
        author_id: int,
        title: str,
        content: str,
        course_id: Optional[int] = None,
    ) -> int:
        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        title = require_non_empty(title, "Title")
        content = require_non_empty(content, "Content")

        course = None
        if course_id is not None:
            course = self._courses.get_by_id(int(course_id))
            if not course:
                raise NotFoundError("Course not found")

        notice_id = self._notices.create(
            author_id=int(author_id),
            title=title,
            content=content,
            course_id=course.course_id if course else None,
        )

        if course:
            user_ids = list(self._enrollments.list_student_ids(course.course_id))
            message = f"[{course.name}] New notice: {title}"
        else:
            user_ids = [u.user_id for u in self._users.list_by_role(Role.STUDENT)]
            message = f"New notice: {title}"
        self._notifications.notify_many(
            user_ids=user_ids,
            type=NotificationType.NOTICE,
            title=f"[Notice] {title}",
            message=message,
            course_id=course.course_id if course else None,
        )
        logger.info("Notice %s posted by %s", notice_id, author_id)
        return notice_id

    def update(
        self,
        *,
        current_role: Role,
        actor_id: int,
        notice_id: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Notice:
        notice = self._get_editable(current_role=current_role, actor_id=actor_id, notice_id=notice_id)
        new_title = require_non_empty(title, "Title") if title is not None else notice.title
        new_content = require_non_empty(content, "Content") if content is not None else notice.content
        if not self._notices.update(notice_id=notice.notice_id, title=new_title, content=new_content):
            raise ValidationError("Failed to update notice")
        return Notice(
            notice_id=notice.notice_id,
            author_id=notice.author_id,
            title=new_title,
            content=new_content,
            course_id=notice.course_id,
            created_at=notice.created_at,
        )

    def delete(self, *, current_role: Role, actor_id: int, notice_id: int) -> None:
        notice = self._get_editable(current_role=current_role, actor_id=actor_id, notice_id=notice_id)
        if not self._notices.delete(notice.notice_id):
            raise ValidationError("Failed to delete notice")
        logger.info("Notice %s deleted by %s", notice.notice_id, actor_id)

    def list_notices(self, *, course_id: Optional[int] = None) -> Sequence[Notice]:
        return self._notices.list_notices(course_id=int(course_id) if course_id is not None else None)

    def _get_editable(self, *, current_role: Role, actor_id: int, notice_id: int) -> Notice:
        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        notice = self._notices.get_by_id(int(notice_id))
        if not notice:
            raise NotFoundError("Notice not found")
        if current_role != Role.ADMIN and notice.author_id != int(actor_id):
            raise AuthorizationError("You can only edit your own notices")
        return notice
