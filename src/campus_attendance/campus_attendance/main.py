from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container_from_settings
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .attendance.controller import register as register_attendance
from .insights.controller import register as register_insights
from .registry.controller import register as register_registry
from .sessions.controller import register as register_sessions

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    backend = StorageBackend(getattr(settings, "STORAGE_BACKEND", StorageBackend.AUTO.value))
    if backend != StorageBackend.LOCAL:
        _bootstrap_database(settings, db_config)

    container = build_container_from_settings(settings)
    app.extensions["campus_attendance"] = container

    register_sessions(app, container)
    register_attendance(app, container)
    register_registry(app, container)
    register_insights(app, container)

    return app


def _bootstrap_database(settings, db_config: dict) -> None:
    # Bootstrap failures are not fatal: the gateway probe decides the store.
    try:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("seed ready")
    except Exception as e:
        logger.warning("Database bootstrap skipped: %s", e)
