from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceStats:
    present: int
    absent: int
    late: int
    total: int
    percentage: int


def attendance_percentage(present: int, total: int) -> int:
    """Share of ``present`` records, rounded to a whole percent (0 when empty).

    Late records do not count as attended here; see DESIGN.md.
    """
    if total <= 0:
        return 0
    # half-up, not banker's rounding
    return int(present * 100 / total + 0.5)


def calculate_attendance_stats(records: Iterable) -> AttendanceStats:
    present = absent = late = 0
    for r in records:
        if r.status == AttendanceStatus.PRESENT:
            present += 1
        elif r.status == AttendanceStatus.ABSENT:
            absent += 1
        elif r.status == AttendanceStatus.LATE:
            late += 1

    total = present + absent + late
    return AttendanceStats(
        present=present,
        absent=absent,
        late=late,
        total=total,
        percentage=attendance_percentage(present, total),
    )


STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.LATE: "Late",
}

STATUS_CSS = {
    AttendanceStatus.PRESENT: "bg-success",
    AttendanceStatus.ABSENT: "bg-danger",
    AttendanceStatus.LATE: "bg-warning text-dark",
}


def status_label(status: AttendanceStatus) -> str:
    return STATUS_LABELS.get(status, str(status))


def status_css(status: AttendanceStatus) -> str:
    return STATUS_CSS.get(status, "bg-secondary")
