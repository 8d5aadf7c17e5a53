from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model: one class/section line of the aggregated report."""

    class_id: int
    class_name: str
    section_id: int
    section_name: str
    total_students: int
    total_attendance_records: int
    present_count: int
    absent_count: int
    late_count: int
    attendance_percentage: float


@dataclass(frozen=True)
class InstitutionStats:
    total_students: int
    total_attendance_records: int
    total_present: int
    total_absent: int
    total_late: int
    overall_attendance_percentage: float
