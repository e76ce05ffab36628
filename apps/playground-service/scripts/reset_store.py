#!/usr/bin/env python3
"""
Reset Store Script

Wipes all four collections (playgrounds, users, events, messages) so a test
store starts from nothing. Each collection is cleared in its own commit; this
is reset tooling, not a request-serving operation.

Reads database URL from (in order):
- --url argument
- PLAYHUB_TEST_DB
- DATABASE_URL / POSTGRES_* env vars (see playhub.db.database)

Usage:
  python scripts/reset_store.py --yes [--url URL] [--create-schema]
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

logger = logging.getLogger("reset_store")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Wipe every playground-service collection.")
    parser.add_argument("--url", default=None, help="Database URL (defaults to the service configuration)")
    parser.add_argument("--create-schema", action="store_true", help="Create missing tables before wiping")
    parser.add_argument("--yes", action="store_true", help="Confirm the wipe; without it nothing is deleted")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

    from playhub.db.database import DataSource, get_default_source
    from playhub.services.controller import Controller

    source = DataSource.from_url(args.url) if args.url else get_default_source()
    if args.create_schema:
        source.create_schema()
    if not args.yes:
        logger.warning("reset_store: refusing to wipe %s without --yes", source.url)
        return 2

    Controller(source).kill_all()
    logger.info("reset_store: wiped %s", source.url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
