"""Argument parser construction for CLI commands."""

from __future__ import annotations

import argparse

from .cli_auth import add_auth_args
from .config import TRAVERSALS

EPILOG = """\
Examples:
  # Print every link found in one Drive file
  paperchaser extract 1AbCdEfGhIjKlMnOpQrStUvWxYz0123456789

  # Crawl from a file of Drive URLs (one per line)
  paperchaser crawl seeds.txt --output-dir results/

  # Resume an interrupted crawl
  paperchaser crawl seeds.txt \\
      --crawled-ids crawled-ids-<run>.json \\
      --starting-queue crawl-remaining-queue-<run>.json
"""


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    add_auth_args(parser)


def _add_extract_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "drive_id",
        help="Drive file ID or URL to extract links from",
    )
    _add_common_args(parser)


def _add_crawl_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "seed_file",
        help="File with one seed Drive URL per line",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for the results CSV and state files "
             "(default: PAPERCHASER_OUTPUT_DIR or current directory)",
    )
    parser.add_argument(
        "--traversal",
        type=str,
        choices=list(TRAVERSALS),
        default=None,
        help="Crawl newly found files first (depth) or last (breadth) "
             "(default: PAPERCHASER_TRAVERSAL or depth)",
    )

    resume_group = parser.add_argument_group("resuming")
    resume_group.add_argument(
        "--crawled-ids",
        type=str,
        default=None,
        help="Already-crawled ID list from a previous run",
    )
    resume_group.add_argument(
        "--starting-queue",
        type=str,
        default=None,
        help="Remaining queue from a previous run",
    )
    _add_common_args(parser)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paperchaser",
        description="Enumerate Google Drive files shared by link.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract all Drive/Docs/Sheets/Slides links from one Drive file",
    )
    _add_extract_args(extract_parser)

    crawl_parser = subparsers.add_parser(
        "crawl",
        help="Recursively crawl Drive files reachable from seed URLs",
    )
    _add_crawl_args(crawl_parser)

    return parser
