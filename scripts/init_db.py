"""Create the MySQL database and the `documents` table used by STORE_BACKEND=mysql.

Usage: python scripts/init_db.py
Safe to re-run; the schema only uses CREATE ... IF NOT EXISTS.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_console.hr_console.database.bootstrap import apply_schema, list_tables
from src.hr_console.hr_console.main import SCHEMA_PATH, configure_logging

logger = logging.getLogger("init_db")


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=SCHEMA_PATH)
    tables = list_tables(db_config)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    if "documents" not in tables:
        logger.error("Schema applied to %s but the documents table is missing", target)
        return 1

    logger.info("Schema ready on %s (tables=%s)", target, ", ".join(sorted(tables)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
