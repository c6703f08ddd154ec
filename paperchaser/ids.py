"""Resolve Google Drive object identifiers from URLs."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, List, Optional
from urllib.parse import urlsplit

from .links import unique

LOGGER = logging.getLogger(__name__)

DRIVE_ID_PATTERN = re.compile(r".*[^-\w]([-\w]{25,})[^-\w]?.*", re.ASCII)

VALID_DRIVE_ORIGINS = frozenset(
    {
        "https://drive.google.com",
        "https://docs.google.com",
        "https://sheets.google.com",
    }
)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def url_origin(url: str) -> Optional[str]:
    """Return ``scheme://host[:port]`` for *url*, or None if it cannot be parsed."""
    try:
        parts = urlsplit(url)
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme or not host:
        return None
    origin = f"{parts.scheme.lower()}://{host}"
    if port is not None and port != _DEFAULT_PORTS.get(parts.scheme.lower()):
        origin = f"{origin}:{port}"
    return origin


def resolve_id(url: Any) -> Optional[str]:
    """Extract the Drive identifier embedded in a single URL.

    The origin is checked on the ``https://`` form of the URL, but the
    identifier pattern runs against the URL exactly as given. Only one
    identifier is recovered per URL.
    """
    if not isinstance(url, str):
        return None

    secure_url = url
    if secure_url.startswith("http://"):
        secure_url = "https://" + secure_url[len("http://"):]

    origin = url_origin(secure_url)
    if origin not in VALID_DRIVE_ORIGINS:
        return None

    match = DRIVE_ID_PATTERN.match(url)
    if not match:
        LOGGER.debug("No Drive ID in %s", url)
        return None
    return match.group(1)


def resolve_ids(urls: Iterable[Any]) -> List[str]:
    """Return the unique Drive identifiers found in *urls*, first seen first."""
    ids = (resolve_id(url) for url in urls)
    return unique(drive_id for drive_id in ids if drive_id is not None)
