from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SystemSetting:
    """Admin-editable key/value setting. Values are stored as text."""

    key: str
    value: Optional[str]
    description: Optional[str] = None
    is_active: bool = True
