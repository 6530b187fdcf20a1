"""
Script to initialize the snapshot database by applying the
t_options_cboe_snapshot schema.

Includes an option to drop the existing table before creation, a status
report of what is already in place, and a DDL dump for migration tools.
"""

import argparse
import logging
import sys
from typing import List, Optional

from cboe_options_snapshot.config import load_settings
from cboe_options_snapshot.database import get_database_url, get_engine
from cboe_options_snapshot.storage.schema import (
    DDL_DIALECTS,
    apply_schema,
    drop_schema,
    render_ddl,
    schema_status,
)
from cboe_options_snapshot.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def initialize_database(database_url: str, drop_existing: bool = False, echo: bool = False):
    """
    Initializes the database by applying the snapshot schema.

    Args:
        database_url: SQLAlchemy URL of the target database.
        drop_existing: If True, drops the table if it exists before creating it.
        echo: If True, the engine logs every SQL statement.
    """
    logger.info("Starting database initialization...")
    engine = get_engine(database_url, echo=echo)
    if drop_existing:
        logger.warning("Drop existing tables requested. Proceeding to drop tables...")
        drop_schema(engine)
    apply_schema(engine)
    logger.info("Database initialization finished successfully.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage the t_options_cboe_snapshot schema."
    )
    parser.add_argument("--config", help="Path to a YAML settings file.")
    parser.add_argument("--database-url", help="SQLAlchemy database URL (overrides config and environment).")

    subparsers = parser.add_subparsers(dest="command", required=True)

    apply_parser = subparsers.add_parser("apply", help="Create the table and indexes if they do not exist.")
    apply_parser.add_argument(
        "--drop",
        action="store_true", # This makes it a boolean flag
        help="Drop the existing table before creating it."
    )

    subparsers.add_parser("status", help="Report which parts of the schema exist.")

    ddl_parser = subparsers.add_parser("ddl", help="Print the DDL script.")
    ddl_parser.add_argument("--dialect", default="postgresql", choices=sorted(DDL_DIALECTS))
    ddl_parser.add_argument("--output", help="Write the script to this file instead of stdout.")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config, database_url=args.database_url)
        setup_logging(settings.log_level)

        if args.command == "ddl":
            ddl = render_ddl(args.dialect)
            if args.output:
                with open(args.output, "w") as f:
                    f.write(ddl)
                logger.info(f"DDL for dialect '{args.dialect}' written to {args.output}")
            else:
                sys.stdout.write(ddl)
            return 0

        database_url = settings.database_url or get_database_url()

        if args.command == "apply":
            initialize_database(database_url, drop_existing=args.drop, echo=settings.echo)
            return 0

        status = schema_status(get_engine(database_url, echo=settings.echo))
        print(status.report())
        return 0 if status.is_applied else 1

    except Exception as e:
        logger.error(f"Command '{args.command}' failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
