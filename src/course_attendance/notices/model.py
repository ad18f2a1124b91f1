from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Notice:
    notice_id: int
    author_id: int
    title: str
    content: str
    course_id: Optional[int] = None
    created_at: Optional[datetime] = None
