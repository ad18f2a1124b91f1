from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class NotificationDraft:
    """A notification ready to be handed to the host for storage and delivery."""

    user_id: int
    type: NotificationType
    title: str
    message: str
    course_id: Optional[int] = None
    session_id: Optional[int] = None


@dataclass(frozen=True)
class Notification:
    notification_id: int
    user_id: int
    type: NotificationType
    title: str
    message: str
    is_read: bool = False
    created_at: Optional[datetime] = None
    course_id: Optional[int] = None
    session_id: Optional[int] = None
