from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from ..attendance.service import StudentReportRow
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

REPORT_COLUMNS = {
    "student_number": "Student No.",
    "name": "Name",
    "present_count": "Present",
    "late_count": "Late",
    "recorded_absent_count": "Absent",
    "excused_count": "Excused",
    "auto_absent_count": "Missed",
    "late_conversion": "Late to absent",
    "final_absent_count": "Total absences",
    "attendance_rate": "Rate (%)",
    "risk_level": "Risk",
}


def report_frame(rows: Sequence[StudentReportRow]) -> pd.DataFrame:
    data = [r.to_dict() for r in rows]
    df = pd.DataFrame(data, columns=list(REPORT_COLUMNS))
    return df.rename(columns=REPORT_COLUMNS)


def export_report(rows: Sequence[StudentReportRow], path: Union[str, Path], *, sheet_name: str = "Attendance") -> Path:
    """Write a course report to ``.csv`` or ``.xlsx`` (openpyxl)."""

    path = Path(path)
    suffix = path.suffix.lower()
    df = report_frame(rows)

    if suffix == ".csv":
        df.to_csv(path, index=False, encoding="utf-8-sig")
    elif suffix == ".xlsx":
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=sheet_name)
    else:
        raise ValidationError(f"Unsupported report format: {path.suffix or path.name}")

    logger.info("Exported %d report row(s) to %s", len(df), path)
    return path
