from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .container import Container, build_container, build_store
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .locations.controller import register as register_locations
from .payroll.controller import register as register_payroll
from .summary.controller import register as register_summary

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        backend = str(getattr(settings, "STORE_BACKEND", "memory"))
        db_config = dict(getattr(settings, "DB_CONFIG", {}))
        logger.info("settings=%s store=%s", settings_module, backend)

        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(store=build_store(backend=backend, db_config=db_config), settings=settings)

    app.extensions["hr_console"] = container
    register_error_handlers(app)

    register_employees(app, container)
    register_attendance(app, container)
    register_summary(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_locations(app, container)

    return app
