from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.datetime_utils import parse_hhmm
from .common.web import error_response, register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_LATE_CUTOFF, DEFAULT_SESSION_HOURS, DEFAULT_UTC_OFFSET_HOURS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables
from .database.mysql_base import db_cursor
from .admins.controller import register as register_admins
from .attendance.controller import register as register_attendance
from .dashboard.controller import register as register_dashboard
from .employees.controller import register as register_employees
from .faces.controller import register as register_faces
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    # Signed-cookie session with a fixed lifetime from signin.
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(hours=int(getattr(settings, "SESSION_HOURS", DEFAULT_SESSION_HOURS)))
    app.config["SESSION_REFRESH_EACH_REQUEST"] = False
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Strict"
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_admin(db_config)
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            pool_size=int(getattr(settings, "DB_POOL_SIZE", 5)),
            pool_timeout=float(getattr(settings, "DB_POOL_TIMEOUT", 5.0)),
            utc_offset_hours=int(getattr(settings, "LOCAL_UTC_OFFSET_HOURS", DEFAULT_UTC_OFFSET_HOURS)),
            late_cutoff=parse_hhmm(getattr(settings, "LATE_CUTOFF", DEFAULT_LATE_CUTOFF)),
        )

    register_error_handlers(app)
    register_admins(app, container)
    register_employees(app, container)
    register_faces(app, container)
    register_attendance(app, container)
    register_dashboard(app, container)
    register_reports(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        if container.conn is None:
            return jsonify({"status": "ok", "database": "not configured"})
        try:
            with db_cursor(container.conn) as (_, cur):
                cur.execute("SELECT 1 AS ok")
                cur.fetchone()
        except Exception:
            logger.exception("Database health check failed")
            return error_response("Database connection failed", 500, status="error")
        return jsonify({"status": "ok", "database": "connected"})

    return app
