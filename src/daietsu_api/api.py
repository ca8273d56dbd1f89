"""
Public, high-level helpers for building a Daietsu API client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import DaietsuClient
from .core.config import ClientConfig, ClientParameters, load_client_config

__all__ = [
    "create_client",
]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    sandbox: Optional[bool | str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    webhook_secret: Optional[str] = None,
) -> DaietsuClient:
    """
    Construct a :class:`DaietsuClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            client_id,
            client_secret,
            sandbox,
            timeout_seconds,
            webhook_secret,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            client_id=client_id,
            client_secret=client_secret,
            sandbox=sandbox,
            timeout_seconds=timeout_seconds,
            webhook_secret=webhook_secret,
        )
    return DaietsuClient(cfg, session=session)
