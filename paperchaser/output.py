"""Result sinks and formatting helpers for crawl output."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, Union

from .document import RESULT_FIELDS, ResultRecord

LOGGER = logging.getLogger(__name__)

RESULTS_FILENAME = "enumerated-drive-files-{run_id}.csv"


class CsvResultSink:
    """Appends one CSV row per crawled object.

    The file is opened per write so every row reaches disk before the crawl
    moves on. Write errors propagate to the caller.
    """

    def __init__(self, path: Union[str, Path], *, header: bool = True):
        self.path = Path(path)
        self._header = header
        self.rows_written = 0

    @classmethod
    def for_run(cls, run_id: str, directory: Union[str, Path] = ".") -> "CsvResultSink":
        return cls(Path(directory) / RESULTS_FILENAME.format(run_id=run_id))

    def append(self, record: ResultRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        is_new = not self.path.exists() or self.path.stat().st_size == 0
        with open(self.path, "a", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh)
            if is_new and self._header:
                writer.writerow(RESULT_FIELDS)
                LOGGER.debug("Created results file %s", self.path)
            writer.writerow(record.to_row())
        self.rows_written += 1


def format_links(links: Iterable[object]) -> str:
    """Newline-joined links, as printed by ``paperchaser extract``."""
    return "\n".join(str(link) for link in links)
