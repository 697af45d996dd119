"""Regenerate monthly attendance summaries.

Usage: python scripts/generate_summaries.py 2024-03 [employee_id ...]
Without employee ids every employee profile in the store is processed.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_console.hr_console.container import build_container, build_store
from src.hr_console.hr_console.main import configure_logging

logger = logging.getLogger("generate_summaries")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("month", help="YYYY-MM")
    parser.add_argument("employee_ids", nargs="*")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    store = build_store(backend=settings.STORE_BACKEND, db_config=dict(settings.DB_CONFIG))
    container = build_container(store=store, settings=settings)

    employee_ids = args.employee_ids or [e.employee_id for e in container.employee_service.list_employees()]
    done, failed = container.summary_service.generate_many(employee_ids, args.month)

    for summary in done:
        print(
            f"{summary.employee_id}: present={summary.present_days} half={summary.half_days} "
            f"absent={summary.absent_days} hours={summary.total_hours}"
        )
    for employee_id, error in failed.items():
        print(f"{employee_id}: FAILED ({error})")
    logger.info("Done: %d generated, %d failed", len(done), len(failed))
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
