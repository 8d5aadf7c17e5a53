"""In-memory marking grid: students x periods with one status per cell."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Mapping, NamedTuple, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.model import Student
from .model import AttendanceRecord

DEFAULT_STATUS = AttendanceStatus.ABSENT

_CELL_FIELD = re.compile(r"^status\[(\d+)\]\[(\d+)\]$")


class CellKey(NamedTuple):
    student_id: int
    period: int


def cell_field_name(student_id: int, period: int) -> str:
    return f"status[{int(student_id)}][{int(period)}]"


def parse_cell_field(name: str) -> Optional[CellKey]:
    """Inverse of :func:`cell_field_name`; ``None`` for unrelated form fields."""
    m = _CELL_FIELD.match(name)
    if not m:
        return None
    return CellKey(int(m.group(1)), int(m.group(2)))


@dataclass
class AttendanceSheet:
    class_id: int
    section_id: int
    attendance_date: date
    periods: tuple[int, ...]
    students: Sequence[Student]
    statuses: dict[CellKey, AttendanceStatus] = field(default_factory=dict)

    @classmethod
    def from_records(
        cls,
        *,
        class_id: int,
        section_id: int,
        attendance_date: date,
        periods: Iterable[int],
        students: Sequence[Student],
        records: Iterable[AttendanceRecord],
    ) -> "AttendanceSheet":
        sheet = cls(
            class_id=int(class_id),
            section_id=int(section_id),
            attendance_date=attendance_date,
            periods=tuple(sorted(set(int(p) for p in periods))),
            students=list(students),
        )
        for r in records:
            sheet.statuses[CellKey(r.student_id, r.period)] = r.status
        return sheet

    @property
    def student_ids(self) -> list[int]:
        return [s.id for s in self.students]

    def status_for(self, student_id: int, period: int) -> Optional[AttendanceStatus]:
        """Stored status, or ``None`` when the cell was never marked."""
        return self.statuses.get(CellKey(int(student_id), int(period)))

    def set_status(self, student_id: int, period: int, status: AttendanceStatus) -> None:
        key = CellKey(int(student_id), int(period))
        if key.student_id not in self.student_ids or key.period not in self.periods:
            raise ValidationError("Cell is outside the selected students and periods")
        self.statuses[key] = AttendanceStatus(status)

    def mark_all(self, status: AttendanceStatus = AttendanceStatus.PRESENT) -> None:
        self.statuses = {CellKey(sid, p): status for sid in self.student_ids for p in self.periods}

    def apply_form(self, form: Mapping[str, str]) -> None:
        """Copy submitted cell values onto the sheet; blank cells stay unset.

        Cells for students no longer on the roster, or for periods outside the
        sheet, are ignored so a stale form still saves the current roster.
        """
        roster = set(self.student_ids)
        for name, value in form.items():
            key = parse_cell_field(name)
            if key is None or not value:
                continue
            if key.student_id not in roster or key.period not in self.periods:
                continue
            try:
                status = AttendanceStatus(value)
            except ValueError:
                raise ValidationError(f"Unknown attendance status: {value}")
            self.set_status(key.student_id, key.period, status)

    def to_records(self, *, marked_by: int) -> list[AttendanceRecord]:
        """One record per (student, period); unset cells are saved as absent."""
        return [
            AttendanceRecord(
                student_id=s.id,
                class_id=self.class_id,
                section_id=self.section_id,
                attendance_date=self.attendance_date,
                period=p,
                status=self.statuses.get(CellKey(s.id, p), DEFAULT_STATUS),
                marked_by=int(marked_by),
            )
            for s in self.students
            for p in self.periods
        ]
