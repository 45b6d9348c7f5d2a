"""Console entry point: load the back-office data and show the menu."""

import argparse
import sys

from segabank.config import SegaBankConfig
from segabank.exceptions import SegaBankError
from segabank.generators import DemoDataGenerator
from segabank.logging import get_logger, setup_logging
from segabank.menu import Menu
from segabank.store import (
    AccountStore,
    AgencyStore,
    ConnectionProvider,
    OperationStore,
    SchemaManager,
)

logger = get_logger(__name__)


def build_parser(config: SegaBankConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="segabank",
        description="SegaBank back-office: manage agencies, accounts and operations",
    )
    parser.add_argument(
        "--postgres-url",
        type=str,
        default=config.postgres.connection_string,
        help="PostgreSQL connection string (default: from POSTGRES_* / DATABASE_URL)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help=f"Log level (default: {config.log_level})",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default=config.log_format,
        help="Log format (default: standard)",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create the agence, compte and operation tables if missing",
    )
    parser.add_argument(
        "--seed-demo",
        action="store_true",
        help="Insert generated demo agencies, accounts and operations before loading",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.demo.seed,
        help="Random seed for --seed-demo",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the back-office; return the process exit code."""
    try:
        config = SegaBankConfig.from_env()
    except SegaBankError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    args = build_parser(config).parse_args(argv)
    setup_logging(args.log_level, args.log_format)

    provider = ConnectionProvider(args.postgres_url)
    operation_store = OperationStore(provider)
    account_store = AccountStore(provider, operation_store=operation_store)
    agency_store = AgencyStore(provider, account_store=account_store)

    try:
        if args.create_tables:
            SchemaManager(provider).create_tables()
        if args.seed_demo:
            DemoDataGenerator(seed=args.seed).populate(
                agency_store,
                account_store,
                operation_store,
                num_agencies=config.demo.agencies,
                accounts_per_agency=config.demo.accounts_per_agency,
                operations_per_account=config.demo.operations_per_account,
            )
        agencies = agency_store.build_full()
    except SegaBankError:
        logger.exception("Failed to load back-office data")
        print("ERROR")
        return 1

    Menu(agencies, account_store, operation_store).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
