from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import NotificationType
from ..core.exceptions import NotFoundError
from .model import Notification, NotificationDraft
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: NotificationRepository, *, enabled: bool = True):
        self._notifications = notifications
        self._enabled = bool(enabled)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def notify(
        self,
        *,
        user_id: int,
        type: NotificationType,
        title: str,
        message: str,
        course_id: Optional[int] = None,
        session_id: Optional[int] = None,
    ) -> int:
        return self.notify_many(
            user_ids=[user_id],
            type=type,
            title=title,
            message=message,
            course_id=course_id,
            session_id=session_id,
        )

    def notify_many(
        self,
        *,
        user_ids: Iterable[int],
        type: NotificationType,
        title: str,
        message: str,
        course_id: Optional[int] = None,
        session_id: Optional[int] = None,
    ) -> int:
        """Queue one notification per distinct user. Returns the number stored."""

        if not self._enabled:
            return 0

        seen = set()
        drafts: List[NotificationDraft] = []
        for user_id in user_ids:
            if user_id is None or user_id in seen:
                continue
            seen.add(user_id)
            drafts.append(
                NotificationDraft(
                    user_id=int(user_id),
                    type=type,
                    title=title,
                    message=message,
                    course_id=course_id,
                    session_id=session_id,
                )
            )

        if not drafts:
            return 0
        stored = self._notifications.create_many(drafts)
        logger.debug("Queued %d %s notification(s)", stored, type.value)
        return stored

    def list_mine(self, *, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Notification]:
        return self._notifications.list_for_user(int(user_id), limit=int(limit))

    def mark_read(self, *, user_id: int, notification_id: int) -> None:
        notification = self._notifications.get_by_id(int(notification_id))
        # someone else's notification is reported exactly like a missing one
        if not notification or notification.user_id != int(user_id):
            raise NotFoundError("Notification not found")
        self._notifications.mark_read(notification.notification_id)

    def mark_all_read(self, *, user_id: int) -> int:
        return self._notifications.mark_all_read(int(user_id))
