#!/usr/bin/env python3
"""
Operator tasks for the overtime database.

Usage:
  python3 scripts/ot_admin.py [--db-url URL] [--config FILE] create-tables
  python3 scripts/ot_admin.py seed-holidays holidays.yaml
  python3 scripts/ot_admin.py recalculate 2024-03
  python3 scripts/ot_admin.py purge-log [--as-of 2025-01-01]

The database URL defaults to $OVERTIME_DATABASE_URL, then to a local
SQLite file.  Holiday files hold a ``holidays:`` list of
``{date, name, region?}`` entries.
"""

from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

DEFAULT_DB_URL = os.environ.get("OVERTIME_DATABASE_URL", "sqlite:///overtime.db")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Overtime database administration")
    p.add_argument("--db-url", default=DEFAULT_DB_URL, help="SQLAlchemy database URL")
    p.add_argument("--config", default=None, help="Overtime policy YAML (default: built-in set)")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("create-tables", help="Create all tables")

    seed = sub.add_parser("seed-holidays", help="Load holidays from a YAML file")
    seed.add_argument("path", help="YAML file with a 'holidays' list")

    recalc = sub.add_parser("recalculate", help="Recompute every summary for a month")
    recalc.add_argument("month_key", help="Month as YYYY-MM")

    purge = sub.add_parser("purge-log", help="Delete activity log entries past retention")
    purge.add_argument(
        "--as-of",
        default=None,
        help="Reference instant (ISO 8601, default: now)",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    from overtime_config import get_active_config, load_holidays
    from overtime_kernel.db.engine import create_tables, init_engine_from_url, session_scope
    from overtime_kernel.exceptions import FormatError
    from overtime_kernel.services import build_services
    from overtime_kernel.stores import SqlHolidayCalendar

    config = get_active_config(args.config)
    init_engine_from_url(args.db_url)

    if args.command == "create-tables":
        create_tables()
        print("Tables created.")
        return 0

    if args.command == "seed-holidays":
        holidays = load_holidays(Path(args.path))
        with session_scope() as session:
            calendar = SqlHolidayCalendar(session)
            for holiday in holidays:
                calendar.add_holiday(holiday)
        print(f"Seeded {len(holidays)} holidays.")
        return 0

    if args.command == "recalculate":
        try:
            with session_scope() as session:
                summaries = build_services(session, config).aggregator.recalculate_month(
                    args.month_key
                )
        except FormatError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        for s in summaries:
            print(
                f"{s.staff_id:<40} {s.total_ot_hours:>8} h  "
                f"{s.status.value:<6} ({s.approved_claim_count} claims)"
            )
        print(f"Recalculated {len(summaries)} summaries for {args.month_key}.")
        return 0

    if args.command == "purge-log":
        as_of = None
        if args.as_of:
            as_of = datetime.fromisoformat(args.as_of)
            if as_of.tzinfo is None:
                as_of = as_of.replace(tzinfo=timezone.utc)
        with session_scope() as session:
            removed = build_services(session, config).activity_log.purge_expired(as_of)
        print(f"Purged {removed} activity log entries.")
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
