from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceReportRow, InstitutionStats


class ReportRepository(Protocol):
    def get_attendance_report(
        self,
        *,
        start_date: Optional[date],
        end_date: Optional[date],
        class_filter: Optional[int],
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

    def get_attendance_statistics(self) -> Sequence[AttendanceReportRow]:
        """All-time per class/section totals (``attendance_statistics`` view)."""

        raise NotImplementedError

    def get_institution_statistics(self) -> Optional[InstitutionStats]:
        raise NotImplementedError
