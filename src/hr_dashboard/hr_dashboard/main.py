from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_setup import configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .profiles.controller import register as register_profiles

logger = logging.getLogger(__name__)


def load_settings():
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def create_app(container: Optional[Container] = None) -> Flask:
    settings = load_settings()
    settings_module = settings.__name__
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            admin_user=getattr(settings, "DB_ADMIN_USER", None),
            admin_password=getattr(settings, "DB_ADMIN_PASSWORD", None),
            cron_secret=getattr(settings, "CRON_SECRET", None),
            local_timezone=getattr(settings, "LOCAL_TIMEZONE", None),
            timeout_seconds=getattr(settings, "DB_TIMEOUT_SECONDS", None),
        )

    register_attendance(app, container)
    register_profiles(app, container)
    register_announcements(app, container)

    return app
