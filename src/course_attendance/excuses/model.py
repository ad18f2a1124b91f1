from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ExcuseStatus


@dataclass(frozen=True)
class Excuse:
    excuse_id: int
    student_id: int
    reason: str
    status: ExcuseStatus
    created_at: datetime
    file_url: Optional[str] = None
    admin_comment: Optional[str] = None
    decided_by: Optional[int] = None
