from __future__ import annotations

from datetime import date

import pytest

from conftest import CLASS_5, REPORT_ROWS
from school_attendance.core.exceptions import ValidationError
from school_attendance.reports.model import AttendanceReportRow
from school_attendance.reports.service import ReportService


@pytest.fixture
def reports(repos):
    return repos["reports_repo"]


@pytest.fixture
def service(reports):
    return ReportService(reports, today=lambda: date(2024, 5, 1))


def test_build_report_passes_filters(service, reports):
    data = service.build_report(start=date(2024, 4, 1), end=date(2024, 4, 30), class_id=CLASS_5)

    assert reports.calls[-1] == {
        "start_date": date(2024, 4, 1),
        "end_date": date(2024, 4, 30),
        "class_filter": CLASS_5,
    }
    assert len(data.rows) == 2
    assert data.institution.overall_attendance_percentage == 75.0


def test_build_report_rejects_inverted_range(service):
    with pytest.raises(ValidationError):
        service.build_report(start=date(2024, 5, 2), end=date(2024, 5, 1))


def test_export_csv_format(service):
    export = service.export_csv(REPORT_ROWS)

    assert export.filename == "attendance-report-2024-05-01.csv"
    assert export.content.splitlines() == [
        "Class,Section,Total Students,Total Records,Present,Absent,Late,Attendance %",
        "5,A,2,4,3,1,0,75.0",
        "5,B,0,0,0,0,0,0.0",
    ]


def test_export_csv_quotes_names_with_commas(service):
    row = AttendanceReportRow(1, "Grade 5, East", 2, "A", 1, 3, 2, 1, 0, 66.666)
    lines = service.export_csv([row]).content.splitlines()
    assert lines[1] == '"Grade 5, East",A,1,3,2,1,0,66.7'


def test_export_refuses_empty_report(service):
    with pytest.raises(ValidationError, match="No data available to export"):
        service.export_csv([])
