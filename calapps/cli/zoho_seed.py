"""
Zoho Calendar Seed Check CLI
Reports the Zoho Calendar app store entry and seeds it from
ZOHOCALENDAR_CLIENT_ID / ZOHOCALENDAR_CLIENT_SECRET when it is missing.
Run with: python -m calapps.cli.zoho_seed [--dry-run] [--database-url URL]
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv
from pydantic import ValidationError

from calapps.core.config import Settings, get_settings
from calapps.core.logging_config import setup_logging
from calapps.services.app_store import open_app_store
from calapps.services.seed_check import ZOHO_CALENDAR, EnvLookup, run_seed_check

logger = logging.getLogger(__name__)


async def run(args: argparse.Namespace, getenv: EnvLookup, config: Settings) -> None:
    """Open the store, run the check and release the store."""
    async with open_app_store(config) as store:
        result = await run_seed_check(
            store,
            getenv,
            ZOHO_CALENDAR,
            dry_run=args.dry_run,
            show_secrets=args.show_secrets,
        )
    logger.debug(f"Seed check finished: {result}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check and seed the Zoho Calendar app store entry")
    parser.add_argument("--dry-run", action="store_true", help="Report only, never insert")
    parser.add_argument(
        "--show-secrets",
        action="store_true",
        help="Print stored keys unredacted",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override LOG_LEVEL",
    )
    parser.add_argument("--database-url", type=str, help="Override DATABASE_URL")
    return parser


def resolve_settings(database_url: Optional[str] = None) -> Settings:
    """Settings with DATABASE_URL overridden; the override is validated like the env value."""
    config = get_settings()
    if not database_url:
        return config
    return Settings.model_validate({**config.model_dump(), "database_url": database_url})


def main(argv: Optional[Sequence[str]] = None, getenv: Optional[EnvLookup] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_settings(args.database_url)
    except ValidationError as exc:
        parser.error(f"invalid --database-url: {exc.errors()[0]['msg']}")

    if getenv is None:
        load_dotenv()
        getenv = os.environ.get

    setup_logging(level=args.log_level)

    try:
        asyncio.run(run(args, getenv, config))
    except Exception:
        logger.exception("Zoho Calendar seed check failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
