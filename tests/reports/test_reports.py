import pandas as pd
import pytest

from course_attendance.core.enums import Role
from course_attendance.core.exceptions import AuthorizationError, ValidationError
from course_attendance.reports.export import export_report, report_frame


def _mark_absences(container, course, fixed_now):
    svc = container.attendance_service
    # 11: one absence (67%, danger); 12: one late (100%, ok)
    svc.correct_status(current_role=Role.INSTRUCTOR, session_id=1, student_id=11, status="absent", now=fixed_now)
    svc.correct_status(current_role=Role.INSTRUCTOR, session_id=1, student_id=12, status="late", now=fixed_now)


def test_overview_counts_risk_pairs(container, repos, course, fixed_now):
    _mark_absences(container, course, fixed_now)
    repos.sessions.set_open(session_id=2, is_open=True, start_time=None, open_until=None, attendance_mode="code")

    overview = container.admin_report_service.overview(current_role=Role.ADMIN)

    assert overview.total_courses == 1
    assert overview.open_sessions == 1
    assert overview.warning_pairs == 1
    assert overview.danger_pairs == 1

    with pytest.raises(AuthorizationError):
        container.admin_report_service.overview(current_role=Role.INSTRUCTOR)


def test_course_risk_table(container, course, fixed_now):
    _mark_absences(container, course, fixed_now)

    [row] = container.admin_report_service.course_risk_table(current_role=Role.ADMIN)

    assert (row.course_name, row.enrolled, row.warning, row.danger) == ("Databases", 3, 0, 1)
    assert row.average_rate == 89  # (100 + 67 + 100) / 3


def test_report_frame_columns(container, course, fixed_now):
    _mark_absences(container, course, fixed_now)

    df = report_frame(container.attendance_service.course_report(course.course_id))

    assert list(df.columns)[:3] == ["Student No.", "Name", "Present"]
    assert df.iloc[0]["Name"] == "Bob"
    assert df.iloc[0]["Risk"] == "danger"


def test_export_csv_and_xlsx(container, course, fixed_now, tmp_path):
    _mark_absences(container, course, fixed_now)
    rows = container.attendance_service.course_report(course.course_id)

    csv_path = export_report(rows, tmp_path / "report.csv")
    xlsx_path = export_report(rows, tmp_path / "report.xlsx")

    from_csv = pd.read_csv(csv_path, encoding="utf-8-sig", dtype={"Student No.": str})
    from_xlsx = pd.read_excel(xlsx_path, engine="openpyxl", dtype={"Student No.": str})
    assert len(from_csv) == len(from_xlsx) == 3
    assert from_csv.iloc[0]["Student No."] == "20250011"
    assert int(from_xlsx.iloc[0]["Rate (%)"]) == 67


def test_export_rejects_unknown_format(tmp_path):
    with pytest.raises(ValidationError):
        export_report([], tmp_path / "report.pdf")
