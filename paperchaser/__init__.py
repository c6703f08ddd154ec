"""Enumerate Google Drive files shared by link.

Starting from a set of seed Drive URLs, the crawler fetches each file's
metadata and content, mines Docs, Sheets, Slides and folder listings for
links to further Drive files, and records one CSV row per file it can read.
It supports:

- Link extraction from a single Drive file
- Recursive crawling with depth-first or breadth-first ordering
- Interrupt-safe state files for resuming a crawl later

Example usage:

    from paperchaser import AuthConfig, crawl, extract

    auth = AuthConfig(access_token="ya29...")

    # Links found in one file
    links = extract("1AbCdEfGhIjKlMnOpQrStUvWxYz", auth=auth)

    # Full crawl
    report = crawl(["1AbCdEfGhIjKlMnOpQrStUvWxYz"], auth=auth)
    print(report.status, report.stats)
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Iterable, List, Optional, Sequence

from .api import DriveClient
from .auth import AuthConfig, AuthConfigError, AuthExpiredError
from .config import CrawlOptions
from .document import DriveObject, ResultRecord
from .engine import CrawlEngine, CrawlReport, CrawlStatus, Frontier, install_stop_handlers
from .ids import resolve_id, resolve_ids
from .links import extract_links, unique
from .output import CsvResultSink
from .walker import render_path, walk

LOGGER = logging.getLogger(__name__)

__all__ = [
    # Data types
    "DriveObject",
    "ResultRecord",
    # Extraction
    "walk",
    "render_path",
    "extract_links",
    "resolve_id",
    "resolve_ids",
    "unique",
    # Auth
    "AuthConfig",
    "AuthConfigError",
    "AuthExpiredError",
    # Fetching
    "DriveClient",
    "extract",
    "extract_async",
    # Crawling
    "CrawlEngine",
    "CrawlOptions",
    "CrawlReport",
    "CrawlStatus",
    "CsvResultSink",
    "Frontier",
    "crawl",
    "crawl_async",
]


async def extract_async(drive_id: str, *, auth: AuthConfig) -> Optional[List[Any]]:
    """
    Fetch a single Drive file and return the links it contains.

    Args:
        drive_id: The Drive identifier to fetch.
        auth: Access token configuration.

    Returns:
        List of links, or None if the file could not be fetched.

    Raises:
        AuthExpiredError: If the access token was rejected.
    """
    async with DriveClient(auth) as client:
        drive_object = await client.fetch(drive_id)
    if drive_object is None:
        return None
    return drive_object.links


def extract(drive_id: str, *, auth: AuthConfig) -> Optional[List[Any]]:
    """Synchronous wrapper for extract_async."""
    return asyncio.run(extract_async(drive_id, auth=auth))


async def crawl_async(
    seed_ids: Sequence[str],
    *,
    auth: AuthConfig,
    options: Optional[CrawlOptions] = None,
    initial_frontier: Sequence[str] = (),
    initial_visited: Iterable[str] = (),
    run_id: Optional[str] = None,
    handle_signals: bool = True,
) -> CrawlReport:
    """
    Crawl every Drive file reachable by link from *seed_ids*.

    Args:
        seed_ids: Drive identifiers to start from.
        auth: Access token configuration.
        options: Output directory and traversal order.
        initial_frontier: Queue saved by an earlier run.
        initial_visited: Already-crawled IDs saved by an earlier run.
        run_id: Token naming the output files (random UUID by default).
        handle_signals: Stop gracefully on SIGINT/SIGTERM.

    Returns:
        CrawlReport with the final status, counters and state file paths.

    Raises:
        AuthExpiredError: If the access token was rejected mid-crawl.
    """
    options = options or CrawlOptions()
    run_id = run_id or str(uuid.uuid4())
    sink = CsvResultSink.for_run(run_id, options.output_dir)
    LOGGER.info("Appending all crawled Drive files to %s", sink.path)

    stop_event = asyncio.Event()
    remove_handlers = install_stop_handlers(stop_event) if handle_signals else None
    try:
        async with DriveClient(auth) as client:
            engine = CrawlEngine(
                client,
                sink,
                seed_ids,
                initial_frontier=initial_frontier,
                initial_visited=initial_visited,
                run_id=run_id,
                traversal=options.traversal,
                state_dir=options.output_dir,
                stop_event=stop_event,
            )
            return await engine.run()
    finally:
        if remove_handlers is not None:
            remove_handlers()


def crawl(
    seed_ids: Sequence[str],
    *,
    auth: AuthConfig,
    options: Optional[CrawlOptions] = None,
    initial_frontier: Sequence[str] = (),
    initial_visited: Iterable[str] = (),
    run_id: Optional[str] = None,
) -> CrawlReport:
    """Synchronous wrapper for crawl_async."""
    return asyncio.run(
        crawl_async(
            seed_ids,
            auth=auth,
            options=options,
            initial_frontier=initial_frontier,
            initial_visited=initial_visited,
            run_id=run_id,
        )
    )
