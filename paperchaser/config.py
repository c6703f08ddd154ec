"""Crawl configuration: selector sets per Drive type and run options."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple

from .document import MIME_DOCUMENT, MIME_PRESENTATION, MIME_SPREADSHEET

LOGGER = logging.getLogger(__name__)

Traversal = Literal["depth", "breadth"]
TRAVERSALS: Tuple[str, ...] = ("depth", "breadth")

USER_AGENT = "paperchaser"
FOLDER_PAGE_SIZE = 1000
FOLDER_ORDER_BY: List[str] = ["folder", "modifiedDate", "createdDate"]

DOCUMENT_LINK_SELECTORS: List[str] = ["['link']['url']"]
DOCUMENT_TEXT_SELECTORS: List[str] = [
    "['textRun']['content']",
]

SPREADSHEET_LINK_SELECTORS: List[str] = ["['link']['uri']"]
SPREADSHEET_TEXT_SELECTORS: List[str] = [
    "['userEnteredValue']['stringValue']",
    # Cell notes hold arbitrary text
    "['note']",
    # Chart alt text
    "['spec']['altText']",
]

PRESENTATION_LINK_SELECTORS: List[str] = ["['link']['url']"]
PRESENTATION_TEXT_SELECTORS: List[str] = [
    "['textRun']['content']",
    "['description']",
    # Embedded chart title
    "['title']",
    "['wordArt']['renderedText']",
]

# mime type -> (native link selectors, text element selectors)
SELECTORS: Dict[str, Tuple[List[str], List[str]]] = {
    MIME_DOCUMENT: (DOCUMENT_LINK_SELECTORS, DOCUMENT_TEXT_SELECTORS),
    MIME_SPREADSHEET: (SPREADSHEET_LINK_SELECTORS, SPREADSHEET_TEXT_SELECTORS),
    MIME_PRESENTATION: (PRESENTATION_LINK_SELECTORS, PRESENTATION_TEXT_SELECTORS),
}


@dataclass
class CrawlOptions:
    """Options for a crawl run."""

    output_dir: str = "."
    traversal: Traversal = "depth"


def _convert_traversal(value: Optional[str], default: Traversal) -> Traversal:
    if not value:
        return default
    candidate = value.strip().lower()
    if candidate in TRAVERSALS:
        return candidate  # type: ignore[return-value]
    LOGGER.warning(
        "Unknown traversal '%s'; falling back to %s.", value, default
    )
    return default


def load_crawl_options(
    output_dir: Optional[str] = None,
    traversal: Optional[str] = None,
) -> CrawlOptions:
    """Build CrawlOptions from explicit values, falling back to env vars.

    Supported variables:
        PAPERCHASER_OUTPUT_DIR: Directory for results and state files.
        PAPERCHASER_TRAVERSAL: ``depth`` or ``breadth``.
    """
    defaults = CrawlOptions()
    resolved_dir = output_dir or os.getenv("PAPERCHASER_OUTPUT_DIR") or defaults.output_dir
    resolved_traversal = _convert_traversal(
        traversal or os.getenv("PAPERCHASER_TRAVERSAL"), defaults.traversal
    )
    return CrawlOptions(output_dir=resolved_dir, traversal=resolved_traversal)
