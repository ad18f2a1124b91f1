from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Message:
    message_id: int
    sender_id: int
    receiver_id: int
    content: str
    course_id: Optional[int] = None
    created_at: Optional[datetime] = None
