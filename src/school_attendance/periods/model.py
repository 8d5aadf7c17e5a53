from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Period:
    """Domain entity: a daily time slot shared by the whole institution."""

    id: int
    period_number: int
    name: str
    start_time: Optional[time] = None
    end_time: Optional[time] = None
