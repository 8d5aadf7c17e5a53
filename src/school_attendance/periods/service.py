from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..common.datetime_utils import format_hhmm
from .model import Period
from .repository import PeriodRepository


@dataclass(frozen=True)
class TimetableRow:
    period_number: int
    name: str
    start: str
    end: str


class PeriodService:
    def __init__(self, periods: PeriodRepository):
        self._periods = periods

    def list_periods(self) -> Sequence[Period]:
        return self._periods.list_all()

    def period_numbers(self) -> list[int]:
        return [p.period_number for p in self._periods.list_all()]

    def timetable(self) -> list[TimetableRow]:
        """Daily schedule for the student view.

        Every section follows the same institution-wide periods, so the
        timetable does not depend on the student's class or section.
        """
        return [
            TimetableRow(
                period_number=p.period_number,
                name=p.name,
                start=format_hhmm(p.start_time),
                end=format_hhmm(p.end_time),
            )
            for p in sorted(self._periods.list_all(), key=lambda p: p.period_number)
        ]
