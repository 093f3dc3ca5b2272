"""
Release-phase helper.

Goal:
- Fail fast if the database URL is missing (same resolution as the app,
  including the legacy DB_CONNECTION name and the no-sqlite-in-prod guard).
- Run alembic migrations.

Usage:
  python scripts/release.py
"""

from __future__ import annotations

import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scripts._db_utils import script_settings  # noqa: E402


def run_release() -> None:
    settings = script_settings()

    print("=== custlookup release start ===", flush=True)
    print(f"ENV={settings.env}", flush=True)
    print("Running Alembic migrations...", flush=True)

    from alembic import command
    from alembic.config import Config

    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))
    command.upgrade(cfg, "head")
    print("Migrations complete.", flush=True)
    print("=== custlookup release done ===", flush=True)


def main() -> None:
    run_release()


if __name__ == "__main__":
    main()
