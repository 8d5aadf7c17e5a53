from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .academics.controller import register as register_academics
from .app_logger import get_logger, setup_logging
from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .dashboards.controller import register as register_dashboards
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_profiles, list_tables
from .database.connection import DBConfig
from .reports.controller import register as register_reports
from .students.controller import register as register_students
from .users.controller import register as register_users

log = get_logger("app")

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    setup_logging(getattr(settings, "LOG_LEVEL", None))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        log.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            log.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_profiles(db_config)
            log.info("demo seed ready")

        container = build_container(db_config=db_config)

    app.extensions["container"] = container

    register_users(app, container)
    register_dashboards(app, container)
    register_academics(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
