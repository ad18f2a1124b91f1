"""Check-in QR codes for sessions.

The QR code carries a small JSON payload, ``{"session_id": .., "code": ..}``,
which a student's scanner posts back as-is.
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import Optional

import qrcode

from ..core.enums import AttendanceMode
from ..core.exceptions import ValidationError
from .model import ClassSession


@dataclass(frozen=True)
class CheckinPayload:
    session_id: int
    code: Optional[str] = None


def checkin_payload(session: ClassSession) -> str:
    if session.attendance_mode == AttendanceMode.CODE and not session.auth_code:
        raise ValidationError("Session has no check-in code")
    data = {"session_id": session.session_id, "code": session.auth_code}
    return json.dumps(data)


def checkin_qr_png(session: ClassSession) -> bytes:
    img = qrcode.make(checkin_payload(session))
    buf = io.BytesIO()
    img.save(buf)
    return buf.getvalue()


def parse_checkin_payload(text: str) -> CheckinPayload:
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        raise ValidationError("Unreadable check-in QR code")

    if not isinstance(data, dict):
        raise ValidationError("Unreadable check-in QR code")

    session_id = data.get("session_id")
    if isinstance(session_id, bool):
        raise ValidationError("QR code does not name a session")
    try:
        session_id = int(session_id)
    except (TypeError, ValueError):
        raise ValidationError("QR code does not name a session")
    if session_id <= 0:
        raise ValidationError("QR code does not name a session")

    code = data.get("code")
    return CheckinPayload(session_id=session_id, code=str(code) if code is not None else None)
