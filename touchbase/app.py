"""
Touchbase — Console digest.

Resolves "today" once in the configured timezone, reads the Contact Store
export and prints who to reach out to, upcoming birthdays and stats.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from touchbase.adapters.json_contact_store import JsonContactStore
from touchbase.config import settings
from touchbase.core.dashboard import build_digest

logger = logging.getLogger(__name__)


def resolve_today(tz_name: str | None = None) -> date:
    """Current calendar date in `tz_name` (defaults to settings.TIMEZONE)."""
    return datetime.now(ZoneInfo(tz_name or settings.TIMEZONE)).date()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="touchbase",
        description="Print who to reach out to next, upcoming birthdays and stats.",
    )
    parser.add_argument(
        "--data", default=None,
        help="Path to the contacts JSON export (default: DATA_PATH)",
    )
    parser.add_argument(
        "--date", type=date.fromisoformat, default=None,
        help="Treat this YYYY-MM-DD as today (default: today in TIMEZONE)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    # No-op when main.py already configured logging
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(settings.LOG_LEVEL)

    today = args.date or resolve_today()
    store = JsonContactStore(path=args.data)
    logger.info("Building digest for %s from %s", today, args.data or settings.DATA_PATH)
    print(asyncio.run(build_digest(store, today)))
