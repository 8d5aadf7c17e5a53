from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    """Top-level grouping (grade). Named to avoid clashing with ``class``."""

    id: int
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Section:
    """A cohort within a class, with at most one home-room teacher."""

    id: int
    name: str
    class_id: int
    teacher_id: Optional[int] = None
    class_name: Optional[str] = None
    teacher_name: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.class_name}-{self.name}" if self.class_name else self.name
