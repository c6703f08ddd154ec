"""Command-line interface for extracting links and crawling Drive files."""

from __future__ import annotations

import argparse
import asyncio
import logging
import shutil
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Configuration directory for global CLI usage
CONFIG_DIR = Path.home() / ".config" / "paperchaser"
CONFIG_ENV_FILE = CONFIG_DIR / ".env"


def _load_config() -> None:
    """Load .env configuration with fallback to user config directory.

    Search order:
    1. .env in current working directory
    2. ~/.config/paperchaser/.env

    If neither exists and .env.example is found in the package directory,
    it will be copied to ~/.config/paperchaser/.env as a starting point.
    """
    local_env = Path.cwd() / ".env"
    if local_env.is_file():
        load_dotenv(local_env)
        return

    if CONFIG_ENV_FILE.is_file():
        load_dotenv(CONFIG_ENV_FILE)
        return

    package_dir = Path(__file__).parent.parent
    example_file = package_dir / ".env.example"

    if example_file.is_file():
        try:
            CONFIG_DIR.mkdir(parents=True, exist_ok=True)
            shutil.copy(example_file, CONFIG_ENV_FILE)
            logging.info(
                "Created config file at %s from .env.example. "
                "Please edit it with your PAPERCHASER_ACCESS_TOKEN.",
                CONFIG_ENV_FILE,
            )
            load_dotenv(CONFIG_ENV_FILE)
        except OSError:
            pass  # Silently continue without config


_load_config()

from .auth import AuthConfig, AuthConfigError, AuthExpiredError
from .cli_auth import build_cli_auth
from .cli_parsers import build_parser
from .config import load_crawl_options
from .engine import CrawlStatus
from .ids import resolve_id, resolve_ids
from .output import format_links
from .state import StateFileError, load_id_list


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def _require_auth(args: argparse.Namespace) -> Optional[AuthConfig]:
    auth = build_cli_auth(args)
    if auth is None:
        logging.error(
            "No access token configured. Use --access-token, --config "
            "or set PAPERCHASER_ACCESS_TOKEN."
        )
    return auth


def _read_seed_ids(seed_file: str) -> Optional[List[str]]:
    """Parse one Drive URL per line; None if the file cannot be read."""
    try:
        text = Path(seed_file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return resolve_ids(line.strip() for line in text.splitlines())


# =============================================================================
# EXTRACT COMMAND
# =============================================================================


async def _run_extract_async(args: argparse.Namespace) -> int:
    """Main async entry point for extract."""
    from . import extract_async

    auth = _require_auth(args)
    if auth is None:
        return 1

    drive_id = resolve_id(args.drive_id) or args.drive_id
    logging.debug("Extracting links from %s", drive_id)

    links = await extract_async(drive_id, auth=auth)
    if links is None:
        logging.error("Could not fetch Drive file %s", drive_id)
        return 1

    if links:
        print(format_links(links))
    return 0


# =============================================================================
# CRAWL COMMAND
# =============================================================================


async def _run_crawl_async(args: argparse.Namespace) -> int:
    """Main async entry point for crawl."""
    from . import crawl_async

    seed_ids = _read_seed_ids(args.seed_file)
    if seed_ids is None:
        logging.error(
            "Error occurred while reading seed file %s. Does the file exist?",
            args.seed_file,
        )
        return 1

    if not seed_ids:
        logging.error("No valid Drive ID(s) could be parsed from %s", args.seed_file)
        return 1

    try:
        initial_visited = load_id_list(args.crawled_ids) if args.crawled_ids else []
        initial_frontier = (
            load_id_list(args.starting_queue) if args.starting_queue else []
        )
    except StateFileError as exc:
        logging.error("%s", exc)
        return 1

    auth = _require_auth(args)
    if auth is None:
        return 1

    options = load_crawl_options(
        output_dir=args.output_dir,
        traversal=args.traversal,
    )

    logging.info(
        "Starting crawl from %d seed ID(s) (traversal=%s)",
        len(seed_ids),
        options.traversal,
    )
    report = await crawl_async(
        seed_ids,
        auth=auth,
        options=options,
        initial_frontier=initial_frontier,
        initial_visited=initial_visited,
    )

    logging.info(
        "Crawl %s: %d file(s) recorded, %d inaccessible, %d still queued",
        report.status.value,
        report.stats.get("records", 0),
        report.stats.get("failures", 0),
        report.stats.get("remaining", 0),
    )

    if report.status is CrawlStatus.INTERRUPTED:
        return 130
    return 0


async def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "extract":
        return await _run_extract_async(args)
    return await _run_crawl_async(args)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the paperchaser command."""
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        return asyncio.run(_dispatch(args))
    except KeyboardInterrupt:
        logging.info("Interrupted")
        return 130
    except AuthExpiredError:
        logging.error("Access token is invalid or expired, quitting")
        return 1
    except AuthConfigError as exc:
        logging.error("%s", exc)
        return 1
    except Exception as exc:
        logging.error("Error: %s", exc)
        if args.verbose:
            logging.exception("Full traceback:")
        return 1


if __name__ == "__main__":
    sys.exit(main())
