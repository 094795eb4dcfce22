"""
Snippetbox: Command-Line Entry Point
====================================

Usage:
    python -m snippetbox [--addr :4000] [--dsn DATABASE_URL] [--log-level INFO]

Flags override the matching environment variables (ADDR, DATABASE_URL,
LOG_LEVEL). The application module is imported only after the overrides are
applied, because the database engine is built from settings at import time.
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from snippetbox.config import settings

logger = logging.getLogger("snippetbox")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snippetbox",
        description="Serve the Snippetbox web application",
    )
    parser.add_argument(
        "--addr",
        default=settings.addr,
        help="HTTP network address, [host]:port (default: %(default)s)",
    )
    parser.add_argument(
        "--dsn",
        default=settings.database_url,
        help="SQLAlchemy async database URL",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="DEBUG, INFO, WARNING, ERROR or CRITICAL (default: %(default)s)",
    )
    return parser


def apply_args(args: argparse.Namespace) -> None:
    """Copy parsed flags onto the settings singleton (validated on assignment)."""
    settings.addr = args.addr
    settings.database_url = args.dsn
    settings.log_level = args.log_level


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        apply_args(args)
    except ValueError as e:
        parser.error(str(e))

    from snippetbox.main import app, setup_logging

    setup_logging()
    logger.info("Starting server on %s", settings.addr)

    uvicorn.run(
        app,
        host=settings.bind_host,
        port=settings.bind_port,
        log_config=None,  # keep the logging configured by setup_logging()
    )


if __name__ == "__main__":
    sys.exit(main())
