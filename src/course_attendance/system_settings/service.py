"""Typed access to the admin-editable key/value settings.

Keys ending in ``_ENABLED``, keys starting with ``SYSTEM_`` and
``EXCUSE_REQUIRE_FILE`` hold booleans. Keys ending in ``_MINUTES`` or
``_COUNT`` (and the other policy numbers) hold integers. Anything missing,
inactive or unparsable falls back to the built-in default.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Optional, Sequence, Union

from ..common.validators import require_non_empty, require_role
from ..core.constants import (
    DEFAULT_ABSENT_DANGER_COUNT,
    DEFAULT_ABSENT_WARN_COUNT,
    DEFAULT_DANGER_RATE_BELOW,
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_LATES_PER_ABSENCE,
    DEFAULT_OPEN_MINUTES,
)
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.policy import AttendancePolicy
from .model import SystemSetting
from .repository import SystemSettingRepository

logger = logging.getLogger(__name__)

SettingValue = Union[bool, int, str, None]

DEFAULTS: Dict[str, SettingValue] = {
    "ATTENDANCE_OPEN_MINUTES": DEFAULT_OPEN_MINUTES,
    "LATE_GRACE_MINUTES": DEFAULT_LATE_GRACE_MINUTES,
    "LATES_PER_ABSENCE": DEFAULT_LATES_PER_ABSENCE,
    "ABSENT_WARN_COUNT": DEFAULT_ABSENT_WARN_COUNT,
    "ABSENT_DANGER_COUNT": DEFAULT_ABSENT_DANGER_COUNT,
    "DANGER_RATE_BELOW": DEFAULT_DANGER_RATE_BELOW,
    "OFFVOTE_ENABLED": True,
    "EXCUSE_REQUIRE_FILE": True,
    "NOTIFICATION_ENABLED": True,
    "SYSTEM_MAINTENANCE": False,
}

_INT_KEYS = {"LATES_PER_ABSENCE", "DANGER_RATE_BELOW"}
_TRUE_WORDS = {"true", "1", "yes", "on"}
_FALSE_WORDS = {"false", "0", "no", "off", ""}


def is_bool_key(key: str) -> bool:
    return key.endswith("_ENABLED") or key.startswith("SYSTEM_") or key == "EXCUSE_REQUIRE_FILE"


def is_int_key(key: str) -> bool:
    return key.endswith("_MINUTES") or key.endswith("_COUNT") or key in _INT_KEYS


def parse_value(key: str, raw: Optional[str]) -> SettingValue:
    """Parse stored text for ``key``; raises ValidationError when it does not fit."""

    if is_bool_key(key):
        text = str(raw if raw is not None else "").strip().lower()
        if text in _TRUE_WORDS:
            return True
        if text in _FALSE_WORDS:
            return False
        raise ValidationError(f"{key} must be true or false")
    if is_int_key(key):
        try:
            number = int(str(raw).strip())
        except (TypeError, ValueError):
            raise ValidationError(f"{key} must be an integer")
        if number < 0:
            raise ValidationError(f"{key} must not be negative")
        return number
    return raw


class SettingsService:
    def __init__(self, settings: SystemSettingRepository):
        self._settings = settings

    def get(self, key: str) -> SettingValue:
        row = self._settings.get(key)
        default = DEFAULTS.get(key)
        if not row or not row.is_active or row.value is None:
            return default
        try:
            return parse_value(key, row.value)
        except ValidationError:
            logger.warning("Ignoring invalid stored value for %s: %r", key, row.value)
            return default

    def get_bool(self, key: str) -> bool:
        return bool(self.get(key))

    def get_int(self, key: str) -> int:
        value = self.get(key)
        return int(value) if value is not None else 0

    def list_all(self, *, current_role: Role) -> Sequence[SystemSetting]:
        require_role(current_role, (Role.ADMIN,))
        return self._settings.list_all()

    def set(
        self,
        *,
        current_role: Role,
        actor_id: int,
        key: str,
        value,
        description: Optional[str] = None,
    ) -> SettingValue:
        require_role(current_role, (Role.ADMIN,))
        key = require_non_empty(key, "Key").upper()

        if isinstance(value, bool):
            text = "true" if value else "false"
        else:
            text = "" if value is None else str(value).strip()
        parsed = parse_value(key, text)
        if isinstance(parsed, bool):
            text = "true" if parsed else "false"
        elif isinstance(parsed, int):
            text = str(parsed)

        self._settings.upsert(key=key, value=text, description=description, updated_by=int(actor_id))
        logger.info("Setting %s updated by %s", key, actor_id)
        return parsed

    def delete(self, *, current_role: Role, key: str) -> None:
        require_role(current_role, (Role.ADMIN,))
        if not self._settings.delete(key):
            raise NotFoundError("Setting not found")

    def attendance_policy(self, base: AttendancePolicy | None = None) -> AttendancePolicy:
        """Read the attendance thresholds once into an explicit policy object."""

        base = base or AttendancePolicy()
        policy = replace(
            base,
            open_minutes=self._int_or(base.open_minutes, "ATTENDANCE_OPEN_MINUTES"),
            late_grace_minutes=self._int_or(base.late_grace_minutes, "LATE_GRACE_MINUTES"),
            lates_per_absence=self._int_or(base.lates_per_absence, "LATES_PER_ABSENCE"),
            warn_absences=self._int_or(base.warn_absences, "ABSENT_WARN_COUNT"),
            danger_absences=self._int_or(base.danger_absences, "ABSENT_DANGER_COUNT"),
            danger_rate_below=self._int_or(base.danger_rate_below, "DANGER_RATE_BELOW"),
        )
        if policy.danger_absences < policy.warn_absences:
            raise ValidationError("ABSENT_DANGER_COUNT must not be lower than ABSENT_WARN_COUNT")
        return policy

    def _int_or(self, fallback: int, key: str) -> int:
        row = self._settings.get(key)
        if not row or not row.is_active or row.value is None:
            return fallback
        try:
            return int(parse_value(key, row.value))
        except ValidationError:
            logger.warning("Ignoring invalid stored value for %s: %r", key, row.value)
            return fallback
