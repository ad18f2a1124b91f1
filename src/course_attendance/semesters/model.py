from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Semester:
    """Academic term; ``start_date`` is the usual input to course scheduling."""

    semester_id: int
    year: int
    term: int
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool = False
