from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_section(self, *, section_id: int, attendance_date: date, periods: Sequence[int]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        """History of one student, newest date first, then highest period first."""

        raise NotImplementedError

    def replace_for_section(
        self,
        *,
        section_id: int,
        attendance_date: date,
        periods: Sequence[int],
        records: Sequence[AttendanceRecord],
    ) -> int:
        """Delete rows matching (section, date, periods) and insert ``records``.

        Both steps run in one transaction. Returns the number of inserted rows.
        """

        raise NotImplementedError

    def mark_for_periods(
        self,
        *,
        student_ids: Sequence[int],
        class_id: int,
        section_id: int,
        attendance_date: date,
        periods: Sequence[int],
        status: AttendanceStatus,
        marked_by: int,
    ) -> int:
        """Upsert one status for every (student, period) pair."""

        raise NotImplementedError
