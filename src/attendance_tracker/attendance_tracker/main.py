from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .absence.controller import register as register_absence
from .attendance.controller import register as register_attendance
from .container import build_container
from .core.constants import DEFAULT_CHECKIN_OPEN_MINUTES, DEFAULT_TIMEZONE_NAME, DEFAULT_UTC_OFFSET_HOURS
from .database.bootstrap import apply_schema, list_tables

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def load_settings():
    load_dotenv(override=False)
    settings_module = get_settings_module()
    return settings_module, importlib.import_module(settings_module)


def configure_logging(settings) -> None:
    level = getattr(settings, "LOG_LEVEL", "INFO")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")


def register_routes(app: Flask, container) -> None:
    register_attendance(app, container)
    register_absence(app, container)


def create_app() -> Flask:
    settings_module, settings = load_settings()
    configure_logging(settings)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["CRON_SECRET"] = getattr(settings, "CRON_SECRET", None)
    db_config = getattr(settings, "DB_CONFIG")

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module, db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        utc_offset_hours=float(getattr(settings, "UTC_OFFSET_HOURS", DEFAULT_UTC_OFFSET_HOURS)),
        timezone_name=getattr(settings, "TIMEZONE_NAME", DEFAULT_TIMEZONE_NAME),
        checkin_open_minutes=int(getattr(settings, "CHECKIN_OPEN_MINUTES", DEFAULT_CHECKIN_OPEN_MINUTES)),
    )
    register_routes(app, container)

    return app
