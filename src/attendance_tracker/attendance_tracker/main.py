from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_PAGE_LIMIT, DEFAULT_USER_ID
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str | int = logging.INFO) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    # basicConfig is a no-op once the root logger has handlers (pytest, gunicorn).
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    ``container`` replaces the MySQL-backed wiring (tests pass one with
    in-memory repositories); the schema bootstrap is skipped in that case.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_USER_ID"] = getattr(settings, "DEFAULT_USER_ID", DEFAULT_USER_ID)
    app.config["DEFAULT_PAGE_LIMIT"] = int(getattr(settings, "DEFAULT_PAGE_LIMIT", DEFAULT_PAGE_LIMIT))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.debug("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.debug("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config)

    app.extensions["attendance_tracker"] = container
    register_attendance(app, container)

    return app
