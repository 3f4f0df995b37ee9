"""CLI entrypoint for the PREreview -> Zenodo record sync check."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from prereview_zenodo_sync.config import Settings, read_settings
from prereview_zenodo_sync.errors import ConfigError, SyncError
from prereview_zenodo_sync.reconcile import run_program
from prereview_zenodo_sync.record_codec import record_to_text
from prereview_zenodo_sync.zenodo_client import search


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(
        description="Compare published PREreview full reviews with their Zenodo records",
    )
    parser.add_argument(
        "--mode",
        choices=["reconcile", "search"],
        default="reconcile",
        help=(
            "'reconcile' (default): diff every published review against its Zenodo record. "
            "'search': print the first page of a Zenodo records search."
        ),
    )
    parser.add_argument(
        "--query",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Search parameter for --mode search, e.g. --query q=prereview --query size=10",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def parse_query(pairs: list[str]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a query dict; later keys win."""
    query: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ConfigError(f"--query expects KEY=VALUE, got {pair!r}")
        query[key] = value
    return query


def run_search(settings: Settings, query: dict[str, str]) -> None:
    """Print every record on the first page of a Zenodo search."""
    records = search(settings, query)
    logging.info("Zenodo search returned %s records query=%s", len(records), query)
    for record in records:
        print(record_to_text(record), end="")


def main(argv: list[str] | None = None) -> int:
    """Initialize config, execute one run and return the process exit code."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        settings = read_settings()
        if args.mode == "search":
            run_search(settings, parse_query(args.query))
        else:
            run_program(settings)
    except ConfigError as exc:
        logging.error("%s", exc)
        return 1
    except SyncError as exc:
        logging.error("Run failed: %s", exc)
        return 1
    except Exception:  # last-resort guard so the exit code is always set
        logging.exception("Unexpected error")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
