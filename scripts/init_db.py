"""
Create the schema and optionally seed demo customers.

Usage:
  python scripts/init_db.py            # create tables only
  python scripts/init_db.py --seed     # create tables + demo customers

Prefer `alembic upgrade head` against shared databases; this is for local
SQLite setups and tests.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scripts._db_utils import create_script_engine, script_session, script_settings  # noqa: E402

from app.custlookup.logging_config import configure_logging  # noqa: E402
from app.custlookup.models import Base  # noqa: E402
from app.custlookup.modules.customers.models import Customer  # noqa: E402

logger = logging.getLogger(__name__)

DEMO_CUSTOMERS = (
    ("C1", "Acme Corporation", datetime(2023, 5, 1, 9, 30)),
    ("C2", "Globex Ltd", datetime(2024, 2, 14, 16, 0)),
    ("C3", "Initech", datetime(2022, 11, 3, 8, 15)),
)


def create_schema(database_url: str) -> None:
    engine = create_script_engine(database_url)
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()


def seed_customers(database_url: str) -> int:
    """Insert demo customers that are not present yet. Returns the number added."""
    added = 0
    with script_session(database_url) as s:
        for cid, name, created_at in DEMO_CUSTOMERS:
            if s.get(Customer, cid) is None:
                s.add(Customer(id=cid, name=name, created_at=created_at))
                added += 1
    return added


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Create tables and optionally seed demo customers.")
    ap.add_argument("--seed", action="store_true", help="Insert demo customers (idempotent).")
    args = ap.parse_args(argv)

    settings = script_settings()
    configure_logging(settings.log_level)

    create_schema(settings.database_url)
    logger.info("Schema ready")
    if args.seed:
        added = seed_customers(settings.database_url)
        logger.info("Seeded %d customer(s)", added)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
