"""Per-student attendance summary for one course.

``summarize`` is a pure function: it receives the course's sessions and the
student's marks, and folds them into counts, an attendance rate and a risk
level according to an explicit ``AttendancePolicy``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, Optional, Sequence, Tuple

from ..core.enums import AttendanceStatus, RiskLevel
from ..core.policy import AttendancePolicy
from ..sessions.model import ClassSession
from .model import AttendanceMark, AttendanceSummary

_DEFAULT_POLICY = AttendancePolicy()


def _latest_status_by_session(
    marks: Iterable[AttendanceMark], session_ids: set
) -> Dict[int, AttendanceStatus]:
    # Marks for foreign sessions are dropped. Should a pair ever hold more
    # than one mark, the most recently captured one counts.
    latest: Dict[int, Tuple[Optional[datetime], AttendanceStatus]] = {}
    for mark in marks:
        if mark.session_id not in session_ids:
            continue
        status = AttendanceStatus.parse(mark.status)
        previous = latest.get(mark.session_id)
        if previous is not None and previous[0] is not None:
            if mark.checked_at is None or mark.checked_at < previous[0]:
                continue
        latest[mark.session_id] = (mark.checked_at, status)
    return {session_id: status for session_id, (_, status) in latest.items()}


def attendance_rate(total_sessions: int, final_absent_count: int) -> int:
    """Whole-percent rate, rounded half up and never below zero."""

    if total_sessions <= 0:
        return 0
    attended = total_sessions - final_absent_count
    if attended <= 0:
        return 0
    return (200 * attended + total_sessions) // (2 * total_sessions)


def classify_risk(
    final_absent_count: int, rate: int, policy: AttendancePolicy, *, total_sessions: int
) -> RiskLevel:
    if total_sessions <= 0:
        return RiskLevel.OK
    if final_absent_count >= policy.danger_absences or rate < policy.danger_rate_below:
        return RiskLevel.DANGER
    if final_absent_count >= policy.warn_absences:
        return RiskLevel.WARNING
    return RiskLevel.OK


def summarize(
    sessions: Sequence[ClassSession],
    marks: Iterable[AttendanceMark],
    policy: Optional[AttendancePolicy] = None,
) -> AttendanceSummary:
    policy = policy or _DEFAULT_POLICY
    session_ids = {s.session_id for s in sessions}
    decided = {
        session_id: status
        for session_id, status in _latest_status_by_session(marks, session_ids).items()
        if status.is_decided
    }

    counts = {status: 0 for status in AttendanceStatus}
    for status in decided.values():
        counts[status] += 1

    auto_absent = sum(
        1
        for s in sessions
        if not s.is_open and s.start_time is not None and s.session_id not in decided
    )

    late = counts[AttendanceStatus.LATE]
    per_absence = policy.lates_per_absence
    late_conversion = late // per_absence if per_absence > 0 else 0
    remaining_lates = late - late_conversion * per_absence if per_absence > 0 else late

    recorded_absent = counts[AttendanceStatus.ABSENT]
    final_absent = recorded_absent + auto_absent + late_conversion
    total = len(sessions)
    rate = attendance_rate(total, final_absent)

    return AttendanceSummary(
        total_sessions=total,
        present_count=counts[AttendanceStatus.PRESENT],
        late_count=late,
        recorded_absent_count=recorded_absent,
        excused_count=counts[AttendanceStatus.EXCUSED],
        unmarked_count=total - len(decided),
        auto_absent_count=auto_absent,
        late_conversion=late_conversion,
        remaining_lates=remaining_lates,
        final_absent_count=final_absent,
        attendance_rate=rate,
        risk_level=classify_risk(final_absent, rate, policy, total_sessions=total),
    )
