"""
main.py
-------
Command-line entry point for managing the dashboard database.

Responsibilities:
    - Build the Database client from configuration and close it on exit.
    - init-db: create the schema.
    - seed:    load the placeholder data (idempotent).
    - reset:   drop, recreate and seed.
    - summary: print the dashboard card figures.

Usage:
    python main.py {init-db,seed,reset,summary}
"""

import argparse
import sys
from typing import Optional

from config import require_database_url
from db.connection import Database
from db.errors import StoreError
from db.init_db import create_tables, drop_tables
from services.dashboard_service import DashboardService
from services.seed_service import SeedService
from utils.logger import get_logger

logger = get_logger(__name__)

COMMANDS = ("init-db", "seed", "reset", "summary")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dashboard-db",
        description="Create, seed and inspect the invoices dashboard database.",
    )
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument(
        "--per-stage-commit",
        action="store_true",
        help="commit every seeding stage separately instead of one transaction",
    )
    return parser


def run(command: str, db: Database, per_stage_commit: bool = False) -> None:
    """Execute one CLI command against an open database."""
    if command == "reset":
        logger.info("Resetting database...")
        drop_tables(db)

    if command in ("init-db", "reset"):
        create_tables(db)

    if command in ("seed", "reset"):
        report = SeedService(db).seed_database(single_transaction=not per_stage_commit)
        print(f"✅ Database seeded: {report}")

    if command == "summary":
        cards = DashboardService(db).fetch_card_data()
        print(f"Customers:        {cards.number_of_customers}")
        print(f"Invoices:         {cards.number_of_invoices}")
        print(f"Collected:        {cards.total_paid_invoices}")
        print(f"Pending:          {cards.total_pending_invoices}")


def main(argv: Optional[list[str]] = None) -> int:
    """Parse arguments, run the command and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        dsn = require_database_url()
    except RuntimeError as e:
        logger.error(str(e))
        return 1

    # ── Database lifetime is bound to this process ────────
    db = Database(dsn)
    try:
        db.init_pool()
        run(args.command, db, per_stage_commit=args.per_stage_commit)
    except StoreError as e:
        logger.error(f"❌ {args.command} failed: {e}")
        return 1
    finally:
        db.close_pool()
    return 0


if __name__ == "__main__":
    sys.exit(main())
