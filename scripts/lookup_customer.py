"""
Look up one customer from the command line.

Usage:
  python scripts/lookup_customer.py C1
  python scripts/lookup_customer.py C1 --start-date 2023-01-01 --end-date 2023-12-31

Exit codes: 0 found, 1 not found, 2 invalid input.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scripts._db_utils import script_settings  # noqa: E402

from app.custlookup.logging_config import configure_logging  # noqa: E402
from app.custlookup.modules.customers.service import (  # noqa: E402
    CustomerLookup,
    CustomerNotFoundError,
)
from app.custlookup.modules.customers.utils import parse_timestamp  # noqa: E402

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2


def run(lookup: CustomerLookup, customer_id: str, start: str | None, end: str | None) -> int:
    try:
        start_date = parse_timestamp(start)
        end_date = parse_timestamp(end, end_of_day=True)
        customer = lookup.lookup(customer_id, start_date, end_date)
    except ValueError as e:  # includes InvalidInputError
        print(f"invalid input: {e}", file=sys.stderr)
        return EXIT_INVALID
    except CustomerNotFoundError as e:
        print(str(e), file=sys.stderr)
        return EXIT_NOT_FOUND
    print(json.dumps(customer.to_dict(), indent=2))
    return EXIT_FOUND


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Fetch a single customer by id.")
    ap.add_argument("customer_id")
    ap.add_argument("--start-date", default=None, help="YYYY-MM-DD or ISO-8601 timestamp")
    ap.add_argument("--end-date", default=None, help="YYYY-MM-DD or ISO-8601 timestamp")
    args = ap.parse_args(argv)

    settings = script_settings()
    configure_logging(settings.log_level)
    lookup = CustomerLookup.from_settings(settings)
    return run(lookup, args.customer_id, args.start_date, args.end_date)


if __name__ == "__main__":
    raise SystemExit(main())
