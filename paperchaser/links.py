"""Helpers for pulling links out of Drive document structures."""

from __future__ import annotations

import re
from typing import Any, Hashable, Iterable, List, Sequence

from .walker import find_by_suffix

# Host labels match ``x+(-x+)*``; the nested ``(x+-?)*`` form backtracks
# exponentially on long dotless hosts.
_HOST_CHARS = "a-z\u00a1-\uffff0-9"
_TLD_CHARS = "a-z\u00a1-\uffff"

URL_PATTERN = re.compile(
    r"(?:https?|ftp)://"
    r"(?:\S+(?::\S*)?@)?"
    r"(?:"
    r"(?:22[0-3]|2[0-1]\d|1\d\d|[1-9]\d|[1-9])"
    r"(?:\.(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]\d|[0-9])){2}"
    r"(?:\.(?:25[0-4]|2[0-4]\d|1\d\d|[1-9]\d|[1-9]))"
    r"|"
    rf"(?:[{_HOST_CHARS}]+(?:-[{_HOST_CHARS}]+)*)"
    rf"(?:\.[{_HOST_CHARS}]+(?:-[{_HOST_CHARS}]+)*)*"
    rf"(?:\.[{_TLD_CHARS}]{{2,}})"
    r")"
    r"(?::\d{2,5})?"
    r"(?:/[^\s]*)?",
    re.IGNORECASE,
)


def unique(items: Iterable[Hashable]) -> List[Any]:
    """Drop duplicates, keeping the first occurrence of each item."""
    seen: set = set()
    out: List[Any] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def get_urls_in_string(text: str) -> List[str]:
    """Return every URL embedded in *text*, in order of appearance."""
    return [match.group(0) for match in URL_PATTERN.finditer(text)]


def get_nested_values(structure: Any, selector: str) -> List[Any]:
    return list(find_by_suffix(structure, selector))


def extract_links(
    structure: Any,
    native_link_selectors: Sequence[str],
    text_element_selectors: Sequence[str],
) -> List[Any]:
    """Extract all links from a Drive document structure.

    Args:
        structure: Parsed Docs/Sheets/Slides response body.
        native_link_selectors: Path suffixes whose values already are URLs,
            e.g. ``['link']['url']``.
        text_element_selectors: Path suffixes holding free text that may embed
            URLs, e.g. ``['textRun']['content']``.

    Returns:
        Links found in text elements followed by native links, without
        duplicates.
    """
    native_links: List[Any] = []
    for selector in native_link_selectors:
        for value in get_nested_values(structure, selector):
            # Only leaves count; a selector can also land on a sub-object.
            if isinstance(value, (dict, list)):
                continue
            native_links.append(value)

    text_links: List[str] = []
    for selector in text_element_selectors:
        for value in get_nested_values(structure, selector):
            if not isinstance(value, str):
                continue
            if "https://" not in value and "http://" not in value:
                continue
            text_links.extend(get_urls_in_string(value))

    return unique(text_links + native_links)
