from __future__ import annotations

import importlib
from pathlib import Path

from school_attendance.config import get_settings_module
from school_attendance.database.bootstrap import apply_seed_sql, ensure_demo_profiles
from school_attendance.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    ensure_demo_profiles(db_config)

    print(f"OK: Seeded database -> {DBConfig.from_dict(db_config).describe()}")
    print("Demo logins: admin@school.test / teacher@school.test / student@school.test")


if __name__ == "__main__":
    main()
