from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceReportRow, InstitutionStats
from .repository import ReportRepository


def _to_row(r: dict) -> AttendanceReportRow:
    return AttendanceReportRow(
        class_id=int(r["class_id"]),
        class_name=r["class_name"],
        section_id=int(r["section_id"]),
        section_name=r["section_name"],
        total_students=int(r.get("total_students") or 0),
        total_attendance_records=int(r.get("total_attendance_records") or 0),
        present_count=int(r.get("present_count") or 0),
        absent_count=int(r.get("absent_count") or 0),
        late_count=int(r.get("late_count") or 0),
        attendance_percentage=float(r.get("attendance_percentage") or 0),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_attendance_report(
        self,
        *,
        start_date: Optional[date],
        end_date: Optional[date],
        class_filter: Optional[int],
    ) -> Sequence[AttendanceReportRow]:
        join_clauses = ["a.section_id = s.id"]
        join_params: list[object] = []
        if start_date is not None:
            join_clauses.append("a.date >= %s")
            join_params.append(start_date)
        if end_date is not None:
            join_clauses.append("a.date <= %s")
            join_params.append(end_date)

        where = ""
        where_params: list[object] = []
        if class_filter is not None:
            where = "WHERE c.id = %s"
            where_params.append(int(class_filter))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    c.id AS class_id,
                    c.name AS class_name,
                    s.id AS section_id,
                    s.name AS section_name,
                    (SELECT COUNT(*) FROM students st WHERE st.section_id = s.id) AS total_students,
                    COUNT(a.id) AS total_attendance_records,
                    COALESCE(SUM(a.status = 'present'), 0) AS present_count,
                    COALESCE(SUM(a.status = 'absent'), 0) AS absent_count,
                    COALESCE(SUM(a.status = 'late'), 0) AS late_count,
                    COALESCE(ROUND(SUM(a.status = 'present') * 100 / NULLIF(COUNT(a.id), 0), 2), 0)
                        AS attendance_percentage
                FROM sections s
                JOIN classes c ON c.id = s.class_id
                LEFT JOIN attendance a ON {" AND ".join(join_clauses)}
                {where}
                GROUP BY c.id, c.name, s.id, s.name
                ORDER BY c.name, s.name
                """,
                tuple(join_params + where_params),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def get_attendance_statistics(self) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM attendance_statistics ORDER BY class_name, section_name")
            return [_to_row(r) for r in fetchall(cur)]

    def get_institution_statistics(self) -> Optional[InstitutionStats]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM institution_statistics")
            r = fetchone(cur)
            if not r:
                return None
            return InstitutionStats(
                total_students=int(r.get("total_students") or 0),
                total_attendance_records=int(r.get("total_attendance_records") or 0),
                total_present=int(r.get("total_present") or 0),
                total_absent=int(r.get("total_absent") or 0),
                total_late=int(r.get("total_late") or 0),
                overall_attendance_percentage=float(r.get("overall_attendance_percentage") or 0),
            )
