"""Authentication-related CLI argument helpers."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from typing import Callable, Optional

from .auth import AuthConfig, load_auth_from_env, load_auth_from_file


def build_cli_auth(
    args: argparse.Namespace,
    auth_loader: Callable[[], Optional[AuthConfig]] = load_auth_from_env,
) -> Optional[AuthConfig]:
    """Build AuthConfig from CLI arguments, falling back to env vars.

    Precedence: ``--access-token``, then ``--config``, then the environment.
    ``--proxy`` overrides whatever proxy the chosen source provides.
    """
    access_token = getattr(args, "access_token", None)
    config_file = getattr(args, "config", None)
    proxy = getattr(args, "proxy", None)

    if access_token:
        return AuthConfig(access_token=access_token, proxy=proxy)

    if config_file:
        auth = load_auth_from_file(config_file)
        logging.info("Using access token from %s", config_file)
    else:
        auth = auth_loader()

    if auth is not None and proxy:
        auth = dataclasses.replace(auth, proxy=proxy)
    return auth


def add_auth_args(parser: argparse.ArgumentParser) -> None:
    """Add authentication arguments to an argparse parser."""
    auth_group = parser.add_argument_group("authentication")
    auth_group.add_argument(
        "--access-token",
        type=str,
        default=None,
        help="OAuth 2 access token (default: PAPERCHASER_ACCESS_TOKEN)",
    )
    auth_group.add_argument(
        "--config",
        type=str,
        default=None,
        help='JSON config file, e.g. {"access_token": "ya29...", "proxy": null}',
    )
    auth_group.add_argument(
        "--proxy",
        type=str,
        default=None,
        help="Proxy URL for API requests (default: PAPERCHASER_PROXY)",
    )
