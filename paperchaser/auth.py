"""Access-token configuration and expiry detection for the Drive APIs.

Every request carries an OAuth bearer token. Tokens are short-lived, so
this module also decides whether an API response means the token has
expired, in which case the crawl has to stop.

Example usage:

    from paperchaser.auth import load_auth_from_file

    auth = load_auth_from_file("./config.json")
    headers = auth.headers()
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from .config import USER_AGENT

LOGGER = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Request had invalid authentication credentials."


class AuthConfigError(ValueError):
    """Raised when no usable access token can be configured."""


class AuthExpiredError(Exception):
    """Raised when the API rejects the access token as invalid or expired."""

    def __init__(self, message: str, url: str = ""):
        self.url = url
        super().__init__(message)


@dataclass
class AuthConfig:
    """Credentials and transport settings for Drive API requests.

    Attributes:
        access_token: OAuth 2 bearer token.
        proxy: Optional proxy URL for all requests.
    """

    access_token: str
    proxy: Optional[str] = None

    def __post_init__(self) -> None:
        self.access_token = (self.access_token or "").strip()
        if not self.access_token:
            raise AuthConfigError("An access token is required")

    def headers(self) -> Dict[str, str]:
        return {
            "User-Agent": USER_AGENT,
            "Authorization": f"Bearer {self.access_token}",
        }


def load_auth_from_env() -> Optional[AuthConfig]:
    """Load auth configuration from environment variables.

    Supported variables:
        PAPERCHASER_ACCESS_TOKEN: OAuth bearer token.
        PAPERCHASER_PROXY: Optional proxy URL.

    Returns:
        AuthConfig if a token is set, None otherwise.
    """
    token = os.environ.get("PAPERCHASER_ACCESS_TOKEN")
    if not token:
        return None
    return AuthConfig(
        access_token=token,
        proxy=os.environ.get("PAPERCHASER_PROXY") or None,
    )


def load_auth_from_file(path: str) -> AuthConfig:
    """Load auth configuration from a JSON config file.

    The file should contain a JSON object with ``access_token`` and an
    optional ``proxy``.

    Raises:
        AuthConfigError: If the file is missing, not JSON, or has no token.
    """
    config_path = Path(path).expanduser()
    if not config_path.is_file():
        raise AuthConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise AuthConfigError(f"Config file has invalid JSON: {config_path}") from exc

    if not isinstance(data, dict):
        raise AuthConfigError(f"Config file must hold a JSON object: {config_path}")

    LOGGER.debug("Loaded config from %s", config_path)
    return AuthConfig(
        access_token=data.get("access_token") or "",
        proxy=data.get("proxy") or None,
    )


def is_invalid_token_response(response: httpx.Response) -> bool:
    """Return True if *response* says the access token is invalid or expired.

    Google answers with ``401`` and either a ``WWW-Authenticate`` header
    carrying ``error="invalid_token"`` or a JSON body such as::

        {"error": {"code": 401,
                   "message": "Request had invalid authentication credentials. ...",
                   "status": "UNAUTHENTICATED"}}
    """
    if response.status_code != 401:
        return False

    challenge = response.headers.get("www-authenticate")
    if challenge and "invalid_token" in challenge:
        return True

    try:
        body: Any = response.json()
    except ValueError:
        return False

    if not isinstance(body, dict):
        return False
    error = body.get("error")
    if not isinstance(error, dict):
        return False

    if error.get("status") == "UNAUTHENTICATED":
        return True

    message = error.get("message")
    return isinstance(message, str) and message.startswith(INVALID_CREDENTIALS_MESSAGE)
