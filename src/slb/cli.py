"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from slb import __version__, config
from slb.app import LayerBuilderApp
from slb.browser import Browser
from slb.model import RecordStore, StoreError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slb",
        description="Browse captured protocol messages and edit a TOML layer",
    )
    parser.add_argument("sql_path", help="SQLite database with the captured messages")
    parser.add_argument("layer_path", help="TOML layer file to edit")
    parser.add_argument(
        "--table",
        default=config.DEFAULT_TABLE,
        help=f"message table name (default: {config.DEFAULT_TABLE})",
    )
    parser.add_argument(
        "--log-file",
        default="",
        help="write logs to this file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="log debug messages",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(log_file: str, verbose: bool) -> None:
    # The terminal belongs to the UI, so logs only ever go to a file.
    if not log_file:
        logging.getLogger("slb").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=config.LOG_FORMAT,
        handlers=[logging.FileHandler(log_file, encoding="utf-8")],
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    try:
        store = RecordStore(args.sql_path, args.layer_path, table=args.table)
    except StoreError as exc:
        print(f"slb: {exc}", file=sys.stderr)
        return 1

    with store:
        try:
            browser = Browser(store)
        except StoreError as exc:
            print(f"slb: {exc}", file=sys.stderr)
            return 1
        logger.info("starting with %d records", len(browser.records))
        app = LayerBuilderApp(browser, source=args.sql_path)
        app.run()
        if store.dirty:
            logger.warning("exiting with unsaved layer changes")
    return 0


if __name__ == "__main__":
    sys.exit(main())
