from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Section
from .repository import SectionRepository

_SELECT = """
    SELECT s.id, s.name, s.class_id, s.teacher_id,
           c.name AS class_name,
           p.full_name AS teacher_name
    FROM sections s
    JOIN classes c ON c.id = s.class_id
    LEFT JOIN profiles p ON p.id = s.teacher_id
"""


def _to_section(r: dict) -> Section:
    return Section(
        id=int(r["id"]),
        name=r["name"],
        class_id=int(r["class_id"]),
        teacher_id=int(r["teacher_id"]) if r.get("teacher_id") is not None else None,
        class_name=r.get("class_name"),
        teacher_name=r.get("teacher_name"),
    )


class MySQLSectionRepository(SectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY c.name, s.name")
            return [_to_section(r) for r in fetchall(cur)]

    def list_by_class(self, class_id: int) -> Sequence[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.class_id=%s ORDER BY s.name", (int(class_id),))
            return [_to_section(r) for r in fetchall(cur)]

    def list_by_teacher(self, teacher_id: int) -> Sequence[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.teacher_id=%s ORDER BY c.name, s.name", (int(teacher_id),))
            return [_to_section(r) for r in fetchall(cur)]

    def get_by_id(self, section_id: int) -> Optional[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.id=%s", (int(section_id),))
            r = fetchone(cur)
            return _to_section(r) if r else None

    def create(self, *, name: str, class_id: int, teacher_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO sections(name, class_id, teacher_id) VALUES(%s,%s,%s)",
                (name, int(class_id), teacher_id),
            )
            return int(cur.lastrowid)

    def update(self, *, section_id: int, name: str, class_id: int, teacher_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE sections SET name=%s, class_id=%s, teacher_id=%s WHERE id=%s",
                (name, int(class_id), teacher_id, int(section_id)),
            )
            return cur.rowcount > 0

    def delete(self, section_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sections WHERE id=%s", (int(section_id),))
            return cur.rowcount > 0
