from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Gender
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import Student, StudentFields
from .repository import StudentRepository

_SELECT = """
    SELECT st.id, st.full_name, st.roll_no, st.class_id, st.section_id, st.gender,
           st.date_of_birth, st.guardian_name, st.guardian_contact, st.address, st.user_id,
           c.name AS class_name,
           s.name AS section_name
    FROM students st
    LEFT JOIN classes c ON c.id = st.class_id
    LEFT JOIN sections s ON s.id = st.section_id
"""


def _opt_int(value) -> Optional[int]:
    return int(value) if value is not None else None


def _to_student(r: dict) -> Student:
    return Student(
        id=int(r["id"]),
        full_name=r["full_name"],
        roll_no=r["roll_no"],
        class_id=_opt_int(r.get("class_id")),
        section_id=_opt_int(r.get("section_id")),
        gender=Gender(r["gender"]),
        date_of_birth=normalize_mysql_date(r["date_of_birth"]),
        guardian_name=r["guardian_name"],
        guardian_contact=r["guardian_contact"],
        address=r.get("address"),
        user_id=_opt_int(r.get("user_id")),
        class_name=r.get("class_name"),
        section_name=r.get("section_name"),
    )


def _params(f: StudentFields) -> tuple:
    return (
        f.full_name,
        f.roll_no,
        f.class_id,
        f.section_id,
        f.gender.value,
        f.date_of_birth,
        f.guardian_name,
        f.guardian_contact,
        f.address,
        f.user_id,
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY st.full_name")
            return [_to_student(r) for r in fetchall(cur)]

    def list_by_section(self, section_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE st.section_id=%s ORDER BY st.roll_no", (int(section_id),))
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE st.id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE st.user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(self, fields: StudentFields) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(full_name, roll_no, class_id, section_id, gender, date_of_birth,
                                     guardian_name, guardian_contact, address, user_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(fields),
            )
            return int(cur.lastrowid)

    def update(self, student_id: int, fields: StudentFields) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET full_name=%s, roll_no=%s, class_id=%s, section_id=%s, gender=%s, date_of_birth=%s,
                    guardian_name=%s, guardian_contact=%s, address=%s, user_id=%s
                WHERE id=%s
                """,
                _params(fields) + (int(student_id),),
            )
            return cur.rowcount > 0

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0
