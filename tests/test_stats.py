from __future__ import annotations

from types import SimpleNamespace

import pytest

from school_attendance.common.stats import (
    attendance_percentage,
    calculate_attendance_stats,
    status_css,
    status_label,
)
from school_attendance.core.enums import AttendanceStatus


def _records(*statuses):
    return [SimpleNamespace(status=AttendanceStatus(s)) for s in statuses]


def test_zero_total_is_zero_percent():
    stats = calculate_attendance_stats([])
    assert stats.total == 0
    assert stats.percentage == 0


@pytest.mark.parametrize(
    "present,total,expected",
    [(1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (5, 8, 63), (0, 4, 0), (4, 4, 100)],
)
def test_percentage_rounds_half_up(present, total, expected):
    assert attendance_percentage(present, total) == expected


def test_counts_each_status_and_late_is_not_present():
    stats = calculate_attendance_stats(_records("present", "present", "absent", "late"))

    assert (stats.present, stats.absent, stats.late, stats.total) == (2, 1, 1, 4)
    assert stats.percentage == 50


def test_status_presentation():
    assert status_label(AttendanceStatus.LATE) == "Late"
    assert status_css(AttendanceStatus.PRESENT) == "bg-success"
