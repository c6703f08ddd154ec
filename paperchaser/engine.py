"""Crawl engine: frontier, visited set and the main fetch loop."""

from __future__ import annotations

import asyncio
import logging
import signal
import uuid
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Deque, Dict, Iterable, Iterator, List, Optional, Protocol, Sequence, Set, Union

from .auth import AuthExpiredError
from .config import Traversal
from .document import DriveObject, ResultRecord
from .ids import resolve_ids
from .links import unique
from .state import StateFiles, flush_state

LOGGER = logging.getLogger(__name__)


class ObjectFetcher(Protocol):
    async def fetch(self, drive_id: str) -> Optional[DriveObject]: ...


class ResultSink(Protocol):
    def append(self, record: ResultRecord) -> None: ...


class CrawlStatus(str, Enum):
    RUNNING = "running"
    INTERRUPTED = "interrupted"
    DRAINED = "drained"
    FAILED = "failed"


class Frontier:
    """Duplicate-free queue of identifiers still to crawl.

    Identifiers are popped from the right. With ``depth`` traversal new
    discoveries are pushed on the right and crawled next; with ``breadth``
    they are pushed on the left and wait behind everything already queued.
    Iteration follows storage order, so the last item is the next to pop.
    """

    def __init__(self, traversal: Traversal = "depth"):
        if traversal not in ("depth", "breadth"):
            raise ValueError(f"Unknown traversal: {traversal!r}")
        self.traversal = traversal
        self._queue: Deque[str] = deque()
        self._members: Set[str] = set()

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, drive_id: object) -> bool:
        return drive_id in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._queue))

    def extend(self, drive_ids: Iterable[str]) -> None:
        """Append identifiers in storage order (used for seeding and resuming)."""
        for drive_id in drive_ids:
            if drive_id in self._members:
                continue
            self._members.add(drive_id)
            self._queue.append(drive_id)

    def push(self, drive_id: str) -> bool:
        """Queue a newly discovered identifier; returns False if already queued."""
        if drive_id in self._members:
            return False
        self._members.add(drive_id)
        if self.traversal == "depth":
            self._queue.append(drive_id)
        else:
            self._queue.appendleft(drive_id)
        return True

    def pop(self) -> str:
        drive_id = self._queue.pop()
        self._members.discard(drive_id)
        return drive_id


class VisitedSet:
    """Insertion-ordered set of identifiers already crawled."""

    def __init__(self, drive_ids: Iterable[str] = ()):
        self._ids: Dict[str, None] = dict.fromkeys(drive_ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, drive_id: object) -> bool:
        return drive_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def add(self, drive_id: str) -> None:
        self._ids[drive_id] = None


@dataclass
class CrawlReport:
    """Summary of a finished crawl run."""

    run_id: str
    status: CrawlStatus
    stats: Dict[str, int] = field(default_factory=dict)
    state_files: StateFiles = field(default_factory=StateFiles)


class CrawlEngine:
    """Crawls Drive objects reachable by link from a set of seed identifiers.

    One fetch is in flight at a time. ``stop_event`` is checked before each
    iteration; once set, the engine stops and flushes its state exactly as it
    does on completion.
    """

    def __init__(
        self,
        fetcher: ObjectFetcher,
        sink: ResultSink,
        seed_ids: Sequence[str],
        *,
        initial_frontier: Sequence[str] = (),
        initial_visited: Iterable[str] = (),
        run_id: Optional[str] = None,
        traversal: Traversal = "depth",
        state_dir: Union[str, Path] = ".",
        stop_event: Optional[asyncio.Event] = None,
    ):
        self.run_id = run_id or str(uuid.uuid4())
        self.status = CrawlStatus.RUNNING
        self.state_dir = state_dir
        self._fetcher = fetcher
        self._sink = sink
        self._stop_event = stop_event or asyncio.Event()

        self.visited = VisitedSet(initial_visited)
        self.frontier = Frontier(traversal)
        self.frontier.extend(
            drive_id
            for drive_id in unique(list(initial_frontier) + list(seed_ids))
            if drive_id not in self.visited
        )

        self.fetched = 0
        self.records = 0
        self.failures = 0

    def request_stop(self) -> None:
        self._stop_event.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def stats(self) -> Dict[str, int]:
        return {
            "fetched": self.fetched,
            "records": self.records,
            "failures": self.failures,
            "visited": len(self.visited),
            "remaining": len(self.frontier),
        }

    def flush(self) -> StateFiles:
        """Write the visited set and remaining frontier for this run."""
        return flush_state(self.run_id, self.visited, self.frontier, self.state_dir)

    async def run(self) -> CrawlReport:
        """Crawl until the frontier drains or a stop is requested.

        Raises:
            AuthExpiredError: After flushing state, if the token was rejected.
        """
        self.status = CrawlStatus.RUNNING
        try:
            while self.frontier:
                if self.stop_requested:
                    self.status = CrawlStatus.INTERRUPTED
                    LOGGER.info(
                        "Interrupt detected, flushing queue and results before quitting"
                    )
                    break
                await self.step()
        except AuthExpiredError:
            self.status = CrawlStatus.FAILED
            LOGGER.error("Access token is invalid, stopping crawl")
            self.flush()
            raise

        if self.status is CrawlStatus.RUNNING:
            self.status = CrawlStatus.DRAINED
            LOGGER.info("Crawl exhausted all items in the queue")

        state_files = self.flush()
        return CrawlReport(
            run_id=self.run_id,
            status=self.status,
            stats=self.stats(),
            state_files=state_files,
        )

    async def step(self) -> List[str]:
        """Crawl one identifier and return the identifiers it added to the frontier."""
        drive_id = self.frontier.pop()
        LOGGER.info(
            "Crawling Drive file %s, %d queued, %d already crawled",
            drive_id,
            len(self.frontier),
            len(self.visited),
        )
        self.visited.add(drive_id)
        self.fetched += 1

        try:
            drive_object = await self._fetcher.fetch(drive_id)
        except AuthExpiredError:
            raise
        except Exception as exc:
            LOGGER.warning("Failed to fetch %s: %s", drive_id, exc)
            drive_object = None

        if drive_object is None:
            self.failures += 1
            LOGGER.debug("No data for %s, marked as crawled", drive_id)
            return []

        try:
            record = ResultRecord.from_metadata(drive_object.metadata, drive_id=drive_id)
        except Exception as exc:
            self.failures += 1
            LOGGER.warning("Unreadable metadata for %s: %s", drive_id, exc)
            return []

        self._sink.append(record)
        self.records += 1

        added: List[str] = []
        for new_id in resolve_ids(drive_object.links):
            if new_id in self.visited:
                continue
            if self.frontier.push(new_id):
                added.append(new_id)

        if added:
            LOGGER.debug("Queued %d new ID(s) from %s", len(added), drive_id)
        return added


def install_stop_handlers(
    stop_event: asyncio.Event,
    signals: Sequence[int] = (signal.SIGINT, signal.SIGTERM),
) -> Callable[[], None]:
    """Set *stop_event* on the given signals; returns a function that undoes it."""
    loop = asyncio.get_running_loop()
    installed: List[int] = []
    for sig in signals:
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except (NotImplementedError, RuntimeError, ValueError) as exc:
            LOGGER.debug("Cannot handle signal %s: %s", sig, exc)
            continue
        installed.append(sig)

    def remove() -> None:
        for sig in installed:
            loop.remove_signal_handler(sig)

    return remove
