"""Flat-file persistence of crawl state for manual resumption."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

LOGGER = logging.getLogger(__name__)

VISITED_FILENAME = "crawled-ids-{run_id}.json"
FRONTIER_FILENAME = "crawl-remaining-queue-{run_id}.json"


class StateFileError(ValueError):
    """Raised when a persisted ID list cannot be read."""


@dataclass
class StateFiles:
    """Paths written by a persistence flush (None when skipped)."""

    visited: Optional[Path] = None
    frontier: Optional[Path] = None


def _write_id_list(path: Path, ids: List[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(ids), encoding="utf-8")


def flush_state(
    run_id: str,
    visited: Iterable[str],
    frontier: Iterable[str],
    directory: Union[str, Path] = ".",
) -> StateFiles:
    """Write the visited set and the remaining frontier to disk.

    Each collection is written as one JSON array; an empty collection is
    not written at all.
    """
    base = Path(directory)
    written = StateFiles()

    visited_ids = list(visited)
    if visited_ids:
        written.visited = base / VISITED_FILENAME.format(run_id=run_id)
        _write_id_list(written.visited, visited_ids)
        LOGGER.info(
            "Flushed %d already-crawled ID(s) to %s", len(visited_ids), written.visited
        )

    frontier_ids = list(frontier)
    if frontier_ids:
        written.frontier = base / FRONTIER_FILENAME.format(run_id=run_id)
        _write_id_list(written.frontier, frontier_ids)
        LOGGER.info(
            "Flushed %d queued ID(s) to %s", len(frontier_ids), written.frontier
        )

    return written


def load_id_list(path: Union[str, Path]) -> List[str]:
    """Read an ID list written by :func:`flush_state`.

    Raises:
        StateFileError: If the file is missing, not JSON, or not a list of
            strings.
    """
    state_path = Path(path).expanduser()
    if not state_path.is_file():
        raise StateFileError(f"State file not found: {state_path}")

    try:
        data = json.loads(state_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise StateFileError(f"State file has invalid JSON: {state_path}") from exc

    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise StateFileError(f"State file must hold a JSON array of IDs: {state_path}")

    return data
