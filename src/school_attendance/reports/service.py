from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import today_local
from ..core.constants import REPORT_CSV_FILENAME, REPORT_CSV_HEADERS
from ..core.exceptions import ValidationError
from .model import AttendanceReportRow, InstitutionStats
from .repository import ReportRepository

NO_DATA_TO_EXPORT = "No data available to export"


@dataclass(frozen=True)
class ReportData:
    rows: Sequence[AttendanceReportRow]
    institution: Optional[InstitutionStats]


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


class ReportService:
    def __init__(self, reports: ReportRepository, *, today=today_local):
        self._reports = reports
        self._today = today

    def build_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        class_id: Optional[int] = None,
    ) -> ReportData:
        if start and end and start > end:
            raise ValidationError("Start date must be on or before end date")

        rows = self._reports.get_attendance_report(start_date=start, end_date=end, class_filter=class_id)
        institution = self._reports.get_institution_statistics()
        return ReportData(rows=list(rows), institution=institution)

    def section_overview(self) -> Sequence[AttendanceReportRow]:
        return self._reports.get_attendance_statistics()

    def institution_overview(self) -> Optional[InstitutionStats]:
        return self._reports.get_institution_statistics()

    def export_csv(self, rows: Sequence[AttendanceReportRow]) -> CsvExport:
        """Serialize loaded report rows; refuses to produce a header-only file."""
        if not rows:
            raise ValidationError(NO_DATA_TO_EXPORT)

        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(REPORT_CSV_HEADERS)
        for r in rows:
            writer.writerow(
                [
                    r.class_name,
                    r.section_name,
                    r.total_students,
                    r.total_attendance_records,
                    r.present_count,
                    r.absent_count,
                    r.late_count,
                    f"{(r.attendance_percentage or 0):.1f}",
                ]
            )

        filename = REPORT_CSV_FILENAME.format(day=self._today().isoformat())
        return CsvExport(filename=filename, content=out.getvalue())
