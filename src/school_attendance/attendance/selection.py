"""Filter state behind the class/section and period/date pickers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, Optional


@dataclass(frozen=True)
class ClassSectionSelection:
    class_id: Optional[int] = None
    section_id: Optional[int] = None

    def change_class(self, class_id: Optional[int]) -> "ClassSectionSelection":
        # The previous section belongs to the previous class.
        return ClassSectionSelection(class_id=class_id, section_id=None)

    def change_section(self, section_id: Optional[int]) -> "ClassSectionSelection":
        return replace(self, section_id=section_id)

    @property
    def is_complete(self) -> bool:
        return bool(self.class_id and self.section_id)


@dataclass(frozen=True)
class PeriodSelection:
    selected_date: date
    periods: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "periods", tuple(sorted(set(int(p) for p in self.periods))))

    def toggle(self, period_number: int) -> "PeriodSelection":
        period_number = int(period_number)
        if period_number in self.periods:
            return replace(self, periods=tuple(p for p in self.periods if p != period_number))
        return replace(self, periods=self.periods + (period_number,))

    def toggle_all(self, all_periods: Iterable[int]) -> "PeriodSelection":
        """Select every period, or clear the selection when all are already selected."""
        everything = tuple(sorted(set(int(p) for p in all_periods)))
        if set(everything) <= set(self.periods):
            return replace(self, periods=())
        return replace(self, periods=everything)

    def change_date(self, selected_date: date) -> "PeriodSelection":
        return replace(self, selected_date=selected_date)

    def all_selected(self, all_periods: Iterable[int]) -> bool:
        return set(int(p) for p in all_periods) <= set(self.periods)

    @property
    def is_empty(self) -> bool:
        return not self.periods
