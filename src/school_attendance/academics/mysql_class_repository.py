from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SchoolClass
from .repository import ClassRepository


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description FROM classes ORDER BY name")
            return [
                SchoolClass(id=int(r["id"]), name=r["name"], description=r.get("description"))
                for r in fetchall(cur)
            ]

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description FROM classes WHERE id=%s", (int(class_id),))
            r = fetchone(cur)
            if not r:
                return None
            return SchoolClass(id=int(r["id"]), name=r["name"], description=r.get("description"))

    def create(self, *, name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO classes(name, description) VALUES(%s,%s)", (name, description))
            return int(cur.lastrowid)

    def update(self, *, class_id: int, name: str, description: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE classes SET name=%s, description=%s WHERE id=%s",
                (name, description, int(class_id)),
            )
            return cur.rowcount > 0

    def delete(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE id=%s", (int(class_id),))
            return cur.rowcount > 0
