from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .attendance.scheduler import start_reconciliation_scheduler
from .common.log_config import configure_logging
from .container import Container, build_container, build_memory_container
from .core.constants import DEFAULT_RECONCILE_BUFFER_MINUTES, DEFAULT_RECONCILE_INTERVAL_MINUTES, DEFAULT_SCHOOL_TIMEZONE
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .settings.controller import register as register_settings

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        json_output=bool(getattr(settings, "LOG_JSON", False)),
    )

    tz_name = str(getattr(settings, "SCHOOL_TIMEZONE", DEFAULT_SCHOOL_TIMEZONE))
    buffer_minutes = int(getattr(settings, "RECONCILE_BUFFER_MINUTES", DEFAULT_RECONCILE_BUFFER_MINUTES))

    if container is None:
        container = _build_from_settings(settings, tz_name=tz_name, buffer_minutes=buffer_minutes)

    # Creates the default settings row on first start.
    container.settings_repo.get_or_initialize()

    register_attendance(app, container)
    register_settings(app, container)
    app.extensions["school_attendance"] = container

    if bool(getattr(settings, "RECONCILER_ENABLED", False)):
        app.extensions["reconciliation_scheduler"] = start_reconciliation_scheduler(
            container.reconciler,
            interval_minutes=int(getattr(settings, "RECONCILE_INTERVAL_MINUTES", DEFAULT_RECONCILE_INTERVAL_MINUTES)),
            timezone=tz_name,
        )

    return app


def _build_from_settings(settings, *, tz_name: str, buffer_minutes: int) -> Container:
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    if backend == "memory":
        logger.warning("using in-memory storage; data is lost on restart")
        return build_memory_container(tz_name=tz_name, buffer_minutes=buffer_minutes)

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings.__name__,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    root = Path(__file__).resolve().parents[3] / "database"
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=root / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=root / "seed.sql")
        logger.info("demo seed ready")

    return build_container(db_config=db_config, tz_name=tz_name, buffer_minutes=buffer_minutes)
