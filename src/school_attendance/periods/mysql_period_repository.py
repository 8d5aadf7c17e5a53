from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import Period
from .repository import PeriodRepository


class MySQLPeriodRepository(PeriodRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Period]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, period_number, name, start_time, end_time
                FROM periods
                ORDER BY period_number ASC
                """
            )
            return [
                Period(
                    id=int(r["id"]),
                    period_number=int(r["period_number"]),
                    name=r["name"],
                    start_time=normalize_mysql_time(r.get("start_time")),
                    end_time=normalize_mysql_time(r.get("end_time")),
                )
                for r in fetchall(cur)
            ]
