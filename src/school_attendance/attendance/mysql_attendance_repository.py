from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, student_id, class_id, section_id, date, period, status, marked_by, notes"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        student_id=int(r["student_id"]),
        class_id=int(r["class_id"]) if r.get("class_id") is not None else None,
        section_id=int(r["section_id"]) if r.get("section_id") is not None else None,
        attendance_date=normalize_mysql_date(r["date"]),
        period=int(r["period"]),
        status=AttendanceStatus(r["status"]),
        marked_by=int(r["marked_by"]) if r.get("marked_by") is not None else None,
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_section(self, *, section_id: int, attendance_date: date, periods: Sequence[int]) -> Sequence[AttendanceRecord]:
        if not periods:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE section_id=%s AND date=%s AND period IN ({in_clause(periods)})
                """,
                (int(section_id), attendance_date, *[int(p) for p in periods]),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE student_id=%s
                ORDER BY date DESC, period DESC
                """,
                (int(student_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def replace_for_section(
        self,
        *,
        section_id: int,
        attendance_date: date,
        periods: Sequence[int],
        records: Sequence[AttendanceRecord],
    ) -> int:
        if not periods:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"DELETE FROM attendance WHERE section_id=%s AND date=%s AND period IN ({in_clause(periods)})",
                (int(section_id), attendance_date, *[int(p) for p in periods]),
            )
            if records:
                cur.executemany(
                    """
                    INSERT INTO attendance(student_id, class_id, section_id, date, period, status, marked_by, notes)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        class_id=VALUES(class_id),
                        section_id=VALUES(section_id),
                        status=VALUES(status),
                        marked_by=VALUES(marked_by),
                        notes=VALUES(notes)
                    """,
                    [
                        (
                            r.student_id,
                            r.class_id,
                            r.section_id,
                            r.attendance_date,
                            r.period,
                            r.status.value,
                            r.marked_by,
                            r.notes,
                        )
                        for r in records
                    ],
                )
            return len(records)

    def mark_for_periods(
        self,
        *,
        student_ids: Sequence[int],
        class_id: int,
        section_id: int,
        attendance_date: date,
        periods: Sequence[int],
        status: AttendanceStatus,
        marked_by: int,
    ) -> int:
        rows = [
            (int(sid), int(class_id), int(section_id), attendance_date, int(p), status.value, int(marked_by))
            for sid in student_ids
            for p in periods
        ]
        if not rows:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance(student_id, class_id, section_id, date, period, status, marked_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    class_id=VALUES(class_id),
                    section_id=VALUES(section_id),
                    status=VALUES(status),
                    marked_by=VALUES(marked_by)
                """,
                rows,
            )
            return len(rows)
