from __future__ import annotations

from typing import Protocol, Sequence

from .model import Period


class PeriodRepository(Protocol):
    def list_all(self) -> Sequence[Period]:
        """All periods ordered by period number."""

        raise NotImplementedError
