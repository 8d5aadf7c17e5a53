from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..app_logger import get_logger
from .connection import DBConfig, DatabaseConnection

log = get_logger("bootstrap")

DEMO_PROFILES = (
    # email, full name, role, password
    ("admin@school.test", "Admin Demo", "admin", "admin123"),
    ("teacher@school.test", "Priya Nair", "teacher", "teacher123"),
    ("student@school.test", "Riya Sharma", "student", "student123"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    return DatabaseConnection(target).connect(with_database=with_database)


def _run_sql_file(db_config: dict, path: str | Path) -> int:
    target = DBConfig.from_dict(db_config)
    sql = _strip_line_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))

    conn = _connect(target)
    count = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_sql_file(db_config, schema_path)
    log.info("schema applied from %s (%d statements)", schema_path, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_sql_file(db_config, seed_path)
    log.info("seed applied from %s (%d statements)", seed_path, count)


def ensure_demo_profiles(db_config: dict) -> None:
    """Create (or reset) the demo admin/teacher/student logins.

    The teacher becomes home-room teacher of section 5-A and the student
    profile is linked to roll 01 of that section.
    """
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        ids: dict[str, int] = {}
        for email, full_name, role, password in DEMO_PROFILES:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM profiles WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    "UPDATE profiles SET full_name=%s, role=%s, password_hash=%s WHERE id=%s",
                    (full_name, role, password_hash, existing["id"]),
                )
                ids[role] = int(existing["id"])
            else:
                cur.execute(
                    "INSERT INTO profiles (email, full_name, role, password_hash) VALUES (%s, %s, %s, %s)",
                    (email, full_name, role, password_hash),
                )
                ids[role] = int(cur.lastrowid)

        cur.execute(
            """
            SELECT s.id FROM sections s JOIN classes c ON c.id = s.class_id
            WHERE c.name = '5' AND s.name = 'A'
            """
        )
        section = cur.fetchone()
        if section:
            cur.execute("UPDATE sections SET teacher_id=%s WHERE id=%s", (ids["teacher"], section["id"]))
            cur.execute(
                "UPDATE students SET user_id=%s WHERE section_id=%s AND roll_no='01'",
                (ids["student"], section["id"]),
            )

        conn.commit()
        log.info("demo profiles ready: %s", ", ".join(p[0] for p in DEMO_PROFILES))
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
