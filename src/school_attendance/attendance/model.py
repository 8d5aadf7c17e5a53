from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one status for one student on one date and period.

    Logical key: (student_id, attendance_date, period).
    """

    student_id: int
    class_id: Optional[int]
    section_id: Optional[int]
    attendance_date: date
    period: int
    status: AttendanceStatus
    marked_by: Optional[int] = None
    notes: Optional[str] = None
    id: Optional[int] = None
