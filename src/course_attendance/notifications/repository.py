from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notification, NotificationDraft


class NotificationRepository(Protocol):
    def create_many(self, drafts: Sequence[NotificationDraft]) -> int:
        """Store drafts in one batch and return how many were stored."""

        raise NotImplementedError

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int) -> Sequence[Notification]:
        """Newest first."""

        raise NotImplementedError

    def mark_read(self, notification_id: int) -> bool:
        raise NotImplementedError

    def mark_all_read(self, user_id: int) -> int:
        raise NotImplementedError
